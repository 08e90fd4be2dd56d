"""Agent state machine: state model, graph runner, node handlers and orchestrator."""
