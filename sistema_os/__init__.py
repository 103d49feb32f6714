"""Service order notifications: reminders, live feeds and their HTTP surface.

The ASGI application is built by :func:`sistema_os.main.create_app`; the
root ``main.py`` exposes it as ``app`` for ``uvicorn main:app``.
"""
