"""FastAPI application for document analysis."""
