"""WSGI entrypoint for the recipe API.

Serve with ``gunicorn main:app``, or ``flask --app main run`` locally.
The application talks to Firestore using Application Default Credentials.
``GCP_PROJECT``, ``RECIPES_COLLECTION`` and ``RECIPE_NAMES_COLLECTION``
select the project and collections. ``RECIPES_DEFAULT_AMOUNT``,
``RECIPES_MAX_AMOUNT`` and ``RECIPES_EMPTY_LIST_IS_ERROR`` shape recipe
listings, and ``LOG_LEVEL`` sets the root log level.
"""

from recipe_api import create_app

app = create_app()


__all__ = ["app"]
