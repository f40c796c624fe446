"""Branding and server settings, read from .env / environment variables."""

import os

from dotenv import load_dotenv

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
load_dotenv(os.path.join(PROJECT_ROOT, ".env"))

BRAND_NAME = os.environ.get("SANAVI_BRAND_NAME", "SANAVI INTERNATIONAL")
SIGNATORY = os.environ.get("SANAVI_SIGNATORY", "Giovanni Coto")
SIGNATORY_TITLE = os.environ.get("SANAVI_SIGNATORY_TITLE", "Director general para Latinoamérica")

PORT = int(os.environ.get("PORT", 8070))
