#!/usr/bin/env python
"""
Entry point for the Django project.  Sets the default settings module to
``bloodlink.settings`` and delegates to Django's management command line
utility.  ``runserver`` without an address binds to ``0.0.0.0:$PORT``.
"""
import os
import sys


def main() -> None:
    """Run administrative tasks for the Django project."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'bloodlink.settings')
    try:
        from django.core.management import execute_from_command_line  # type: ignore
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc
    argv = list(sys.argv)
    if len(argv) >= 2 and argv[1] == 'runserver' and not any(a[:1].isdigit() or ':' in a for a in argv[2:]):
        argv.append(f"0.0.0.0:{os.getenv('PORT', '4000')}")
    execute_from_command_line(argv)


if __name__ == '__main__':
    main()
