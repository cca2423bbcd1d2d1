"""
LLM provider integration.

- embeddings: httpx client for the OpenAI embeddings endpoint
- agents: pydantic-ai agents for the lore assistant and map analysis
- prompts: prompt templates and context rendering
"""
