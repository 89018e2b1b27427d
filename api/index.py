"""
FastAPI entry point for the SEO Writing Assistant - Vercel Serverless Function.

Builds the application from environment variables (ANTHROPIC_API_KEY,
DATABASE_URL, LLM_MODEL, LLM_TIMEOUT_SECONDS, DRAFT_LIST_LIMIT).
"""

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from seo_writing_assistant.api import create_app

app = create_app()
