#!/usr/bin/env python3
"""
Development startup script.

Checks configuration and starts the storefront in development mode.
"""

import os
import sys
import shutil
import subprocess
from pathlib import Path

from dotenv import dotenv_values

# Project root
PROJECT_ROOT = Path(__file__).parent.parent


def check_dependencies():
    """Check if required dependencies are installed."""
    try:
        import fastapi  # noqa: F401
        import uvicorn  # noqa: F401
        import httpx  # noqa: F401
        import cryptography  # noqa: F401
        print("✓ All core dependencies installed")
        return True
    except ImportError as e:
        print(f"✗ Missing dependency: {e.name}")
        print("\nRun: pip install -e .")
        return False


def check_env():
    """Check that config/.env exists and sets ENCRYPTION_KEY."""
    env_file = PROJECT_ROOT / "config" / ".env"
    env_example = PROJECT_ROOT / "config" / ".env.example"

    if not env_file.exists():
        if not env_example.exists():
            print("✗ No configuration file found")
            return False
        print("! Configuration file not found, copying from example...")
        shutil.copy(env_example, env_file)
        print("✓ Created config/.env from example")

    if os.getenv("ENCRYPTION_KEY") or dotenv_values(env_file).get("ENCRYPTION_KEY"):
        print("✓ Session secret configured")
        return True

    print("✗ ENCRYPTION_KEY is not set")
    return False


def start_service():
    """Start the storefront with auto-reload."""
    print("\n⛳ Starting Storefront on http://localhost:8000 ...")
    print("📍 API docs: http://localhost:8000/docs")
    print("\nPress Ctrl+C to stop")

    process = subprocess.Popen(
        [
            sys.executable, "-m", "uvicorn",
            "storefront.main:app",
            "--reload",
            "--host", "0.0.0.0",
            "--port", "8000",
        ],
        cwd=PROJECT_ROOT,
    )
    try:
        process.wait()
    except KeyboardInterrupt:
        print("\n\nShutting down...")
        process.terminate()
        process.wait()
        print("Storefront stopped.")


def main():
    print("=" * 60)
    print("GLF Online Storefront - Development Server")
    print("=" * 60)

    print("\nRunning pre-flight checks...")

    if not check_dependencies():
        sys.exit(1)

    if not check_env():
        response = input("\nGenerate a session secret now? [Y/n]: ")
        if response.lower() != "n":
            subprocess.run(
                [sys.executable, str(PROJECT_ROOT / "scripts" / "generate_secret.py"), "--write"]
            )
        else:
            print("ENCRYPTION_KEY is required. Exiting.")
            sys.exit(1)

    print("\n✓ All checks passed!")

    start_service()


if __name__ == "__main__":
    main()
