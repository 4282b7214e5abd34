"""
Global pytest configuration and fixtures.
Provides service fixtures for proper dependency injection in tests.
"""

import os

import pytest

# Ensure testing environment before the app module is imported anywhere
os.environ['TESTING'] = '1'
os.environ['FLASK_ENV'] = 'testing'
# SocketIOTestClient runs handlers synchronously; no eventlet hub needed
os.environ['ASYNC_MODE'] = 'threading'


@pytest.fixture(scope="function", autouse=True)
def reset_global_container():
    """Reconfigure the global container before each test so every test gets fresh services."""
    from container import reset_container, configure_container
    from config_factory import ConfigurationFactory, load_config, reset_config

    reset_container()

    from app import socketio as app_socketio
    reset_config()
    load_config()
    configure_container(socketio=app_socketio, config=ConfigurationFactory().to_dict())

    yield


@pytest.fixture(scope="session")
def app():
    """Flask app for testing."""
    from app import app as flask_app
    return flask_app


@pytest.fixture(scope="session")
def socketio():
    """SocketIO instance for testing."""
    from app import socketio as socketio_instance
    return socketio_instance


@pytest.fixture(scope="function")
def container():
    """The configured global service container."""
    from container import get_container
    return get_container()


@pytest.fixture(scope="function")
def room_registry(container):
    """Provide RoomRegistry through dependency injection."""
    return container.get('RoomRegistry')


@pytest.fixture(scope="function")
def coordinator(container):
    """Provide SessionCoordinator through dependency injection."""
    return container.get('SessionCoordinator')


@pytest.fixture(scope="function")
def message_catalog(container):
    """Provide MessageCatalog through dependency injection."""
    return container.get('MessageCatalog')


@pytest.fixture(scope="function")
def validation_service(container):
    """Provide ValidationService through dependency injection."""
    return container.get('ValidationService')



@pytest.fixture(scope="function")
def client_factory(app, socketio):
    """Create connected SocketIOTestClients and disconnect them after the test."""
    clients = []

    def make_client():
        client = socketio.test_client(app)
        clients.append(client)
        return client

    yield make_client

    for client in clients:
        if client.is_connected():
            client.disconnect()
