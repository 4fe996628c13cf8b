import pytest
from pymongo.errors import DuplicateKeyError

from backend.database.db_connection import UserStore
from backend.gateway.server import create_app


class InMemoryUsers:
    """
    Minimal stand-in for the pymongo users collection.
    Enforces the unique email index the same way MongoDB does.
    """

    def __init__(self):
        self.docs = {}
        self.indexes = []

    def create_index(self, keys, unique=False):
        self.indexes.append((keys, unique))

    def find_one(self, query):
        doc = self.docs.get(query.get("email"))
        return dict(doc) if doc else None

    def insert_one(self, doc):
        if doc["email"] in self.docs:
            raise DuplicateKeyError("E11000 duplicate key error collection: users index: email_1")
        self.docs[doc["email"]] = dict(doc)


@pytest.fixture
def users():
    return InMemoryUsers()


@pytest.fixture
def text_generator(mocker):
    generator = mocker.Mock()
    generator.generate.return_value = ("Hello from the model", None)
    return generator


@pytest.fixture
def prediction_client(mocker):
    client = mocker.Mock()
    client.predict.return_value = (b'{"prediction": "nv", "confidence": 0.91}', None)
    return client


@pytest.fixture
def app(users, text_generator, prediction_client):
    app = create_app(
        config={"TESTING": True, "CORS_ORIGINS": "*"},
        user_store=UserStore(users),
        text_generator=text_generator,
        prediction_client=prediction_client,
    )
    return app


@pytest.fixture
def client(app):
    return app.test_client()
