import sys
from pathlib import Path

# Serverless entry point: expose the FastAPI app from backend/.
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "backend"))

from property_voice.main import app  # noqa: E402, F401
