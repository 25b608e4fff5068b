"""Write the OpenAPI document of the recipe API to ``docs/openapi.json``.

Run from the project root with ``APP_ENV`` set to a non-production
environment; the schema endpoint is disabled in production.
"""

import json
from pathlib import Path

from fastapi.openapi.utils import get_openapi

from recipe_rebel.factory import create_app


app = create_app()

openapi_schema = get_openapi(
    title=app.title,
    version=app.version,
    description=app.description,
    routes=app.routes,
)

output = Path("docs/openapi.json")
output.parent.mkdir(parents=True, exist_ok=True)
with output.open("w", encoding="utf-8") as f:
    json.dump(openapi_schema, f, indent=2)
