"""Run a quick smoke test against the app in-process.

Mints a token, then lists teams, using FastAPI's TestClient so no
server needs to be running.
"""

import sys
import os

# Ensure backend folder is on sys.path so `devhouse` package can be imported
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from fastapi.testclient import TestClient
from devhouse.main import app


def run():
    client = TestClient(app)
    health = client.get('/health')
    print('HEALTH:', health.status_code, health.json())
    token = client.post('/api/Auth/token')
    print('TOKEN STATUS:', token.status_code)
    teams = client.get('/api/Team')
    print('TEAMS:', teams.status_code, teams.json())


if __name__ == '__main__':
    run()
