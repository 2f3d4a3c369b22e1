"""Web server command."""

import rich_click as click

from ._console import console


@click.command()
@click.option("--host", "-h", default="127.0.0.1", help="Host to bind to")
@click.option("--port", "-p", default=5173, help="Port to bind to")
@click.option("--reload/--no-reload", default=False, help="Auto-reload on code changes")
def web(host: str, port: int, reload: bool):
    """Start the JSON/streaming API server."""
    import uvicorn

    console.print(f"Starting tweetsum API at http://{host}:{port}")
    console.print("Press Ctrl+C to stop")
    uvicorn.run("tweetsum.web:create_app", host=host, port=port, reload=reload, factory=True)
