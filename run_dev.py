#!/usr/bin/env python3
"""
Development server runner using Gunicorn with a single eventlet worker.
Gunicorn gives better Socket.IO behaviour than Flask's development server.
"""

import os
import subprocess
import sys


def main():
    """Run the development server with Gunicorn."""
    os.environ.setdefault('FLASK_ENV', 'development')
    os.environ.setdefault('PORT', '8000')
    os.environ.setdefault('LOG_LEVEL', 'debug')
    # The eventlet worker needs the matching Socket.IO async mode
    os.environ['ASYNC_MODE'] = 'eventlet'

    try:
        from config_factory import load_config
        config = load_config()
        server_url = f"http://{config.host}:{config.port}"
    except Exception as e:
        print(f"Could not load configuration ({e}), falling back to defaults")
        server_url = f"http://localhost:{os.environ['PORT']}"

    cmd = [
        'gunicorn',
        '--config', 'gunicorn.conf.py',
        '--reload',
        'wsgi:app'
    ]

    print("Starting RPS Arena development server with Gunicorn...")
    print(f"Server will be available at: {server_url}")
    print(f"Health check: {server_url}/health")
    print("Press Ctrl+C to stop the server")

    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        print("\nShutting down development server...")
    except subprocess.CalledProcessError as e:
        print(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
