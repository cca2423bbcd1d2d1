"""Application-wide constants."""

PROJECT_NAME = "Slumbering Ancients"
API_V1_STR = "/api/v1"
VERSION = "0.1.0"

# Dimension of text-embedding-ada-002 vectors stored in wiki_content.embedding
EMBEDDING_DIMENSIONS = 1536
