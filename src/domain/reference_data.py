from __future__ import annotations

# Demo accounts written on first start, in the stored (serialized) shape.
SEED_USERS = [
    {"id": "1", "name": "Sales User", "email": "sales@cmtai.com", "role": "originator"},
    {"id": "2", "name": "CTO", "email": "cto@cmtai.com", "role": "reviewer"},
    {"id": "3", "name": "Developer 1", "email": "dev1@cmtai.com", "role": "assignee"},
    {"id": "4", "name": "Developer 2", "email": "dev2@cmtai.com", "role": "assignee"},
]

SEED_PROJECTS = [
    {
        "id": "1",
        "reference_id": "CMT-123456-001",
        "client_name": "Acme Corp",
        "client_email": "contact@acme.com",
        "client_phone": "555-123-4567",
        "description": "E-commerce website for selling widgets",
        "requirements": "Must include payment gateway, product catalog, and admin portal",
        "status": "development",
        "approved": True,
        "assigned_to": "3",
        "deadline": "2025-05-15",
        "created_by": "1",
        "created_at": "2025-03-01T00:00:00+00:00",
        "completion_date": None,
        "renewal_date": "2026-03-01",
        "notes": [
            {
                "id": "n1",
                "content": "Client prefers a minimalist design",
                "author": "Sales User",
                "is_public": True,
                "created_at": "2025-03-01T00:00:00+00:00",
            },
            {
                "id": "n2",
                "content": "Using React and Node.js for this project",
                "author": "Developer 1",
                "is_public": False,
                "created_at": "2025-03-05T00:00:00+00:00",
            },
        ],
        "credentials": [],
    },
    {
        "id": "2",
        "reference_id": "CMT-789012-002",
        "client_name": "TechStart Inc",
        "client_email": "info@techstart.com",
        "client_phone": "555-987-6543",
        "description": "Startup landing page with contact form",
        "requirements": "Modern design, newsletter signup, contact form",
        "status": "requirements",
        "approved": False,
        "assigned_to": None,
        "deadline": None,
        "created_by": "1",
        "created_at": "2025-04-05T00:00:00+00:00",
        "completion_date": None,
        "renewal_date": None,
        "notes": [
            {
                "id": "n3",
                "content": "Client is in a hurry, needs it within 2 weeks",
                "author": "Sales User",
                "is_public": False,
                "created_at": "2025-04-05T00:00:00+00:00",
            }
        ],
        "credentials": [],
    },
]
