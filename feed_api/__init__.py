"""Feed API - social feed metadata and media URL service."""
