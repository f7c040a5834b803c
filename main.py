"""WSGI entrypoint for the recipe service.

Containerized deployments serve this module with Gunicorn
(``gunicorn main:app``). Local development can use ``flask --app main run``,
which imports the ``app`` object defined below.
"""

from recipe_service import create_app

app = create_app()


__all__ = ["app"]
