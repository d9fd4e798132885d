#!/usr/bin/env python3
"""
Run script for the ChartSpeak backend
"""
import uvicorn

from chartspeak.config.settings import settings
from chartspeak.main import app

if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port, reload=settings.debug)
