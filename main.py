"""
Entry point to run the research tool backend with one command.

Usage:
    RESEARCH_TOOL_CONFIG=config.json python main.py

Then, in a separate terminal:
    streamlit run ui_app.py
"""

import logging

import uvicorn

from research_tool.backend import app
from research_tool.config import settings


if __name__ == "__main__":
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=settings.host, port=settings.port)
