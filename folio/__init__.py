"""
Folio Backend

Document lifecycle service: drafts, review, publication, slugs and
slug redirects.

Package Structure:
==================
    folio/
    ├── api/        ← FastAPI application
    ├── shared/     ← Models, repositories, services, schemas
    └── config/     ← Configuration

Running the Application:
========================
    uvicorn folio.api.main:app --reload
"""
