"""ASGI entrypoint: ``uvicorn main:app``."""

from sistema_os.main import create_app

app = create_app()
