"""Entry point for python -m payment_templates"""

from payment_templates.cli.main import app

app()
