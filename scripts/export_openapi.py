from __future__ import annotations

import json
import sys
from pathlib import Path

from fastapi import FastAPI
from src.api.main import create_app
from src.core.config import Settings


def export_openapi(app: FastAPI, destination: Path) -> None:
    """Write the tracker API's OpenAPI schema to ``destination``."""
    destination.parent.mkdir(parents=True, exist_ok=True)
    schema = app.openapi()
    destination.write_text(json.dumps(schema, indent=2, sort_keys=True))


def main() -> None:
    output = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("docs/api/openapi.json")
    # Schema generation never starts the lifespan, so no database is touched.
    app = create_app(settings=Settings(STATE_BACKEND="memory"))
    export_openapi(app, output)
    print(f"OpenAPI schema written to {output}")


if __name__ == "__main__":
    main()
