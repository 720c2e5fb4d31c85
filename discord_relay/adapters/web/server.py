"""FastAPI liveness endpoint for external uptime probes."""

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

app = FastAPI(title="Discord Relay")


@app.get("/", response_class=PlainTextResponse)
async def root():
    """Liveness probe"""
    return "Bot is running!"
