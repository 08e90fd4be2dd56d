"""LLM infrastructure plus the scraping and file-parsing adapters."""
