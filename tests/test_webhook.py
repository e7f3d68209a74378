from fastapi.testclient import TestClient
from telegram import Bot

from webhook import INFO_TEXT, create_app

SECRET = "s3cret-token"
HEADER = "X-Telegram-Bot-Api-Secret-Token"

UPDATE_JSON = {
    "update_id": 1001,
    "message": {
        "message_id": 5,
        "date": 1700000000,
        "chat": {"id": 2002, "type": "private"},
        "from": {"id": 2002, "is_bot": False, "first_name": "Alice"},
        "text": "/start",
    },
}


class FakeApplication:
    def __init__(self):
        self.bot = Bot("123456:TEST-TOKEN")
        self.processed = []
        self.post_init = None
        self.post_shutdown = None

    async def process_update(self, update):
        self.processed.append(update)


def _client(application):
    # No context manager: the lifespan (which talks to Telegram) is not run.
    app = create_app(application, webhook_path="/webhook", secret_token=SECRET, secret_header=HEADER)
    return TestClient(app)


def test_valid_update_is_processed():
    application = FakeApplication()
    response = _client(application).post("/webhook", json=UPDATE_JSON, headers={HEADER: SECRET})

    assert response.status_code == 200
    assert response.text == "OK"
    assert [u.update_id for u in application.processed] == [1001]
    assert application.processed[0].message.text == "/start"


def test_wrong_or_missing_secret_is_rejected():
    application = FakeApplication()
    client = _client(application)

    assert client.post("/webhook", json=UPDATE_JSON, headers={HEADER: "nope"}).status_code == 401
    assert client.post("/webhook", json=UPDATE_JSON).status_code == 401
    assert application.processed == []


def test_garbage_payload_is_a_bad_request():
    application = FakeApplication()
    response = _client(application).post(
        "/webhook", content=b"not json", headers={HEADER: SECRET, "Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert application.processed == []


def test_everything_else_gets_the_info_page():
    client = _client(FakeApplication())
    for method, path in (("get", "/"), ("get", "/webhook"), ("post", "/other"), ("put", "/webhook/x")):
        response = getattr(client, method)(path)
        assert response.status_code == 200
        assert response.text == INFO_TEXT
