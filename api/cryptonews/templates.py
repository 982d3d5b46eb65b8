"""Jinja2 rendering for the HTML pages."""
from fastapi.responses import HTMLResponse
from jinja2 import Environment, FileSystemLoader, select_autoescape
import pathlib

TEMPLATE_DIR = pathlib.Path(__file__).parent / "templates"

env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)

def render_string(name: str, ctx: dict) -> str:
    return env.get_template(name).render(**ctx)

def render(name: str, ctx: dict, status_code: int = 200) -> HTMLResponse:
    return HTMLResponse(render_string(name, ctx), status_code=status_code)
