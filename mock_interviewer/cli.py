"""
Command-line interface for the Mock Interviewer.

This module provides commands to run the API server and to request an
interview from a running server.
"""
import json
import logging
from typing import Optional

import click
import uvicorn

from mock_interviewer.services.api_client import ApiClient
from mock_interviewer.utils.config import API_BASE_URL, get_server_config

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@click.group()
def cli():
    """Mock Interviewer - voice mock interviews with AI feedback"""
    pass


@cli.command()
@click.option('--host', default="0.0.0.0", help='Interface to bind')
@click.option('--port', default=None, type=int, help='Port to listen on (defaults to PORT)')
@click.option('--reload', is_flag=True, help='Reload on code changes (development only)')
def serve(host: str, port: Optional[int], reload: bool) -> None:
    """
    Run the API server.
    """
    server_config = get_server_config()
    production = server_config["production"]
    port = port or server_config["port"]
    logger.info(f"Starting server on {host}:{port} ({'production' if production else 'development'})")
    uvicorn.run(
        "mock_interviewer.server:app",
        host=host,
        port=port,
        reload=reload and not production,
        proxy_headers=production,
        forwarded_allow_ips="*" if production else None,
        log_level="info",
    )


@cli.command()
@click.option('--type', 'interview_type', default="mixed", help='technical, behavioral or mixed')
@click.option('--role', required=True, help='Job role')
@click.option('--level', default="junior", help='junior, mid, senior, lead or principal')
@click.option('--techstack', required=True, help='Comma-separated tech stack')
@click.option('--amount', default=5, type=int, help='Number of questions (1-20)')
@click.option('--userid', required=True, help='Owning user id')
@click.option('--base-url', default=API_BASE_URL, help='API base URL')
def generate(interview_type: str, role: str, level: str, techstack: str, amount: int,
             userid: str, base_url: Optional[str] = None) -> None:
    """
    Generate an interview on a running server.
    """
    client = ApiClient(base_url=base_url)
    result = client.generate_interview(
        type=interview_type,
        role=role,
        level=level,
        techstack=techstack,
        amount=amount,
        userid=userid,
    )
    click.echo(json.dumps(result, indent=2))
    if not result.get("success"):
        raise SystemExit(1)


if __name__ == "__main__":
    cli()
