#!/usr/bin/env python3
"""
Development runner script for Atelie Art Agent.
"""

import subprocess
import argparse
from typing import Optional


def run_dev_server():
    """Run the API server with auto-reload."""
    print("Starting API server...")
    subprocess.run([
        "uvicorn",
        "app.main:app",
        "--reload",
        "--host", "0.0.0.0",
        "--port", "3001",
        "--log-level", "info"
    ])


def run_worker(concurrency: Optional[int] = None):
    """Run the analysis worker."""
    if concurrency is None:
        from app.config import get_settings
        concurrency = get_settings().worker_concurrency
    print(f"Starting worker with concurrency: {concurrency}")
    subprocess.run([
        "celery",
        "-A", "app.worker:celery_app",
        "worker",
        "--loglevel", "info",
        "--concurrency", str(concurrency),
    ])


def run_tests():
    """Run tests."""
    print("Running tests...")
    subprocess.run(["pytest", "-v"])


def install_deps():
    """Install dependencies."""
    print("Installing dependencies...")
    subprocess.run(["pip", "install", "-e", ".[test]"])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Atelie Art Agent Runner")
    parser.add_argument(
        "command",
        choices=["dev", "worker", "test", "install"],
        help="Command to run"
    )
    parser.add_argument(
        "-c", "--concurrency",
        type=int,
        help="Worker concurrency (for worker command, defaults to WORKER_CONCURRENCY)",
        default=None
    )
    return parser


def main():
    """Main entry point."""
    args = build_parser().parse_args()

    if args.command == "dev":
        run_dev_server()
    elif args.command == "worker":
        run_worker(args.concurrency)
    elif args.command == "test":
        run_tests()
    elif args.command == "install":
        install_deps()


if __name__ == "__main__":
    main()
