"""
expressgen
==========
Express application generator and the harness used to test generated apps.

Basic usage:
    from expressgen import ScaffoldOptions, create_application

    create_application("myapp", ScaffoldOptions(view="pug", css="sass", git=True))

Harness usage:
    from expressgen.harness import AppRunner, run_process

    async with AppRunner("myapp", port=3000) as app:
        response = await app.request("GET", "/")
"""

__version__ = "4.16.1"

from .generator import create_application
from .naming import create_app_name, is_valid_package_name
from .scaffold import ScaffoldEngine, ScaffoldOptions

__all__ = [
    "__version__",
    "create_application",
    "create_app_name",
    "is_valid_package_name",
    "ScaffoldEngine",
    "ScaffoldOptions",
]
