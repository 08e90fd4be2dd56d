"""Canned structured responses for MOCK_LLM=true runs.

Each value goes through the same schema validation as a live reply, so these
dicts must stay in sync with ``jobfit.infra.models``.
"""

MOCK_PARSED_JD = {
    "company": "Acme Cloud Inc.",
    "role": "Staff Software Engineer",
    "level": "Staff",
    "team": "Platform Infrastructure",
    "required_skills": [
        {"name": "Distributed Systems", "category": "domain", "priority": "required"},
        {"name": "Go", "category": "language", "priority": "required"},
        {"name": "Rust", "category": "language", "priority": "required"},
        {"name": "Kubernetes", "category": "platform", "priority": "required"},
        {"name": "Docker", "category": "tool", "priority": "required"},
        {"name": "Observability", "category": "tool", "priority": "required"},
        {"name": "Communication Skills", "category": "soft-skill", "priority": "required"},
    ],
    "preferred_skills": [
        {"name": "gRPC", "category": "framework", "priority": "preferred"},
        {"name": "Service Mesh (Istio/Envoy)", "category": "tool", "priority": "preferred"},
        {"name": "Kafka", "category": "tool", "priority": "preferred"},
        {"name": "Open Source Contributions", "category": "other", "priority": "nice-to-have"},
    ],
    "responsibilities": [
        "Lead design and implementation of scalable, fault-tolerant distributed systems",
        "Define technical strategy for the platform infrastructure team",
        "Own critical path services including API gateway, service mesh, and observability stack",
        "Mentor senior engineers and conduct architecture reviews",
        "Contribute to on-call rotation for Tier-1 services",
    ],
    "tech_stack": [
        "Go", "Rust", "Kubernetes", "Docker", "Terraform", "AWS", "PostgreSQL",
        "Redis", "Kafka", "gRPC", "Prometheus", "Grafana", "Jaeger", "GitHub Actions",
    ],
    "culture": ["Engineering excellence", "Ownership mentality", "Hybrid work (San Francisco)"],
    "red_flags": ["8+ years experience with 2+ at Staff level is a high bar"],
    "salary_range": "$220,000 - $280,000 base + equity",
}

MOCK_PARSED_RESUME = {
    "summary": (
        "Software engineer with 7+ years building scalable backend systems and "
        "cloud-native applications."
    ),
    "skills": [
        {"name": "TypeScript", "category": "language", "priority": "required"},
        {"name": "Python", "category": "language", "priority": "required"},
        {"name": "Java", "category": "language", "priority": "required"},
        {"name": "Docker", "category": "tool", "priority": "required"},
        {"name": "Kubernetes", "category": "platform", "priority": "required"},
        {"name": "AWS", "category": "platform", "priority": "required"},
        {"name": "Terraform", "category": "tool", "priority": "required"},
        {"name": "Kafka", "category": "tool", "priority": "required"},
        {"name": "Redis", "category": "tool", "priority": "required"},
        {"name": "Prometheus", "category": "tool", "priority": "required"},
        {"name": "Grafana", "category": "tool", "priority": "required"},
        {"name": "CI/CD", "category": "methodology", "priority": "required"},
    ],
    "experiences": [
        {
            "company": "TechScale Inc.",
            "role": "Senior Software Engineer",
            "duration": "3 years",
            "highlights": [
                "Designed real-time event processing pipeline handling 50K events/sec using Kafka",
                "Led migration of monolithic API to microservices, reducing deployment time by 70%",
                "Built internal developer platform with CI/CD using GitHub Actions and Docker",
                "Implemented distributed caching layer with Redis, reducing API latency by 40%",
            ],
            "tech_used": ["TypeScript", "PostgreSQL", "Redis", "Kafka", "Docker", "AWS"],
        },
        {
            "company": "DataFlow Systems",
            "role": "Software Engineer II",
            "duration": "2.8 years",
            "highlights": [
                "Built data ingestion service processing 5TB/day using Python and Apache Spark",
                "Implemented observability stack: Prometheus metrics, Grafana dashboards, PagerDuty alerting",
                "Led incident response; reduced MTTR by 50% through runbook automation",
            ],
            "tech_used": ["Python", "Java", "Apache Spark", "Prometheus", "Grafana", "Terraform"],
        },
    ],
    "education": [
        {
            "institution": "University of California, Davis",
            "degree": "Bachelor of Science",
            "field": "Computer Science",
            "year": "2017",
        },
    ],
    "certifications": [
        "AWS Solutions Architect Associate (2023)",
        "Certified Kubernetes Application Developer (CKAD) (2024)",
    ],
    "years_of_experience": 7.5,
}

MOCK_FIT_ANALYSIS = {
    "overall_score": 68,
    "strong_matches": [
        {
            "skill": "Kubernetes & Docker",
            "evidence": "CKAD certified; Docker used throughout the TechScale platform work",
            "strength": "strong",
        },
        {
            "skill": "Observability (Prometheus/Grafana)",
            "evidence": "Built the full observability stack at DataFlow Systems",
            "strength": "strong",
        },
        {
            "skill": "Kafka / Event-Driven Architecture",
            "evidence": "Built a 50K events/sec pipeline at TechScale using Kafka",
            "strength": "strong",
        },
    ],
    "partial_matches": [
        {
            "skill": "Distributed Systems Design",
            "evidence": "Microservices and event pipelines, but no consensus or partitioning work",
            "strength": "moderate",
        },
    ],
    "gaps": [
        {
            "skill": "gRPC / Protocol Buffers",
            "severity": "moderate",
            "suggestion": "Build a small gRPC service before the interview loop.",
        },
        {
            "skill": "Go or Rust",
            "severity": "critical",
            "suggestion": "Ship a side project in Go and lean on systems work from the event pipeline.",
        },
        {
            "skill": "Service Mesh (Istio/Envoy)",
            "severity": "minor",
            "suggestion": "Kubernetes experience is a strong foundation; mention willingness to ramp up.",
        },
    ],
    "overqualified": ["Frontend experience (React) in an infrastructure-only role"],
    "reframing_suggestions": [
        {
            "existing_experience": "Led monolith-to-microservices migration at TechScale",
            "reframed_as": "Led a company-wide distributed systems re-architecture",
            "target_requirement": "Lead design of scalable, fault-tolerant distributed systems",
        },
        {
            "existing_experience": "Built internal developer platform with CI/CD",
            "reframed_as": "Shipped a platform engineering initiative that standardized deployments",
            "target_requirement": "Background in developer experience / platform engineering",
        },
    ],
    "deal_breakers": ["No Go or Rust experience, listed as required"],
    "competitive_advantages": [
        "CKAD certification plus hands-on Kubernetes experience",
        "Strong observability background aligned with owning the observability stack",
        "Proven MTTR reduction, directly relevant to Tier-1 on-call",
    ],
}

MOCK_COVER_LETTER = {
    "cover_letter": """Dear Hiring Manager,

I'm writing to express my strong interest in the Staff Software Engineer role on the Platform Infrastructure team at Acme Cloud Inc. With more than seven years of experience building scalable backend systems and cloud-native applications, I'm excited about the chance to shape the technical direction of your platform.

Your emphasis on engineering excellence and ownership matches how I like to work. At TechScale Inc., I led the migration from a monolithic API to microservices, a company-wide initiative that cut deployment time by 70% and required me to define service boundaries, reliability patterns, and rollout strategies across several teams. That work maps directly to your need for someone to lead the design of scalable, fault-tolerant distributed systems.

Three parts of this role stand out to me. First, owning the observability stack: at DataFlow Systems I built our monitoring with Prometheus, Grafana, and PagerDuty, and the runbook automation that followed reduced MTTR by 50%. Second, the platform engineering focus: I built an internal developer platform at TechScale that standardized CI/CD for the whole engineering organization. Third, mentoring: I have led weekly architecture reviews and coached engineers through complex design decisions.

I bring hands-on experience with much of your stack, including Kubernetes (CKAD certified), Docker, Terraform, AWS, Kafka, PostgreSQL, and Redis. I'm actively deepening my systems programming in Go to complement my TypeScript and Python background.

I would welcome the chance to discuss how my experience in distributed systems and platform engineering can help Acme Cloud's infrastructure team grow.

Best regards,
Kumar Nagarajan""",
}

MOCK_BULLETS = {
    "bullets": [
        {
            "bullet": "Led company-wide migration from a monolith to microservices, defining service boundaries and deployment strategies that cut deployment time by 70%",
            "target_requirement": "Lead design of scalable, fault-tolerant distributed systems",
            "original_experience": "TechScale Inc. - microservices migration",
        },
        {
            "bullet": "Architected a real-time event pipeline handling 50K events/sec on Kafka with end-to-end Prometheus and Grafana observability",
            "target_requirement": "Operate systems at high throughput",
            "original_experience": "TechScale Inc. - event processing pipeline",
        },
        {
            "bullet": "Built the production observability stack (Prometheus, Grafana, PagerDuty) behind a 99.9% uptime SLA",
            "target_requirement": "Own the observability stack",
            "original_experience": "DataFlow Systems - observability stack",
        },
        {
            "bullet": "Standardized CI/CD with GitHub Actions and Docker across the engineering org, cutting new-service onboarding from days to hours",
            "target_requirement": "Platform engineering / developer experience",
            "original_experience": "TechScale Inc. - developer platform",
        },
        {
            "bullet": "Implemented a Redis caching layer that reduced API latency by 40% under peak load",
            "target_requirement": "Own critical path services",
            "original_experience": "TechScale Inc. - Redis caching layer",
        },
    ],
}

MOCK_INTERVIEW_PREP = {
    "technical_questions": [
        {
            "question": "How would you design a fault-tolerant API gateway that handles 10K+ RPS?",
            "why": "Tests distributed systems design, the core of the platform role",
            "talking_points": [
                "Reference the Kafka pipeline at 50K events/sec for scale context",
                "Discuss circuit breakers, load shedding, and graceful degradation",
            ],
        },
        {
            "question": "How would you handle a Kubernetes rolling deployment that goes wrong?",
            "why": "Tests practical Kubernetes depth behind the CKAD certification",
            "talking_points": [
                "Canary releases with automated rollback",
                "Readiness probes and pod disruption budgets",
            ],
        },
        {
            "question": "You don't have Go or Rust experience. How would you ramp up?",
            "why": "They will address the biggest gap directly",
            "talking_points": [
                "Acknowledge the gap honestly",
                "Describe a concrete plan: Go Tour, a small service, an internal contribution",
            ],
        },
    ],
    "behavioral_questions": [
        {
            "question": "Tell me about a technical initiative you led across multiple teams.",
            "why": "Tests staff-level scope",
            "suggested_story": "The monolith-to-microservices migration at TechScale and its 70% faster deployments.",
        },
        {
            "question": "Tell me about a production incident you handled.",
            "why": "The role includes Tier-1 on-call",
            "suggested_story": "Incident response at DataFlow and the runbook automation that halved MTTR.",
        },
    ],
    "questions_to_ask": [
        {
            "question": "What are the platform team's biggest technical challenges for the next 6-12 months?",
            "purpose": "Shows strategic thinking and reveals the real problems",
        },
        {
            "question": "How does the team balance new platform work with reliability and tech debt?",
            "purpose": "Reveals whether reliability is valued in practice",
        },
        {
            "question": "What does success look like in the first 90 days?",
            "purpose": "Sets expectations and shows focus on impact",
        },
    ],
}
