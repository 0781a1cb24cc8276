"""Record Catalog API - FastAPI request layer"""
