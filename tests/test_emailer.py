"""EmailNotifier tests."""

from unittest.mock import MagicMock

import requests

from garden_stock_monitor import config
from garden_stock_monitor.emailer import EmailNotifier


def _notifier(status_code: int = 202, api_key: str = "SG.key") -> EmailNotifier:
    session = MagicMock()
    session.post.return_value = MagicMock(status_code=status_code, text="")
    return EmailNotifier(
        api_key,
        to_address="me@example.com",
        session=session,
        api_url="https://sendgrid.test/v3/mail/send",
    )


class TestEmailNotifier:
    """send() tests."""

    def test_send_success(self):
        notifier = _notifier()
        assert notifier.send("GrowAGarden Stock Update", ["A is back in stock", "B was added to stock"]) is True

        args, kwargs = notifier.session.post.call_args
        assert args == ("https://sendgrid.test/v3/mail/send",)
        assert kwargs["headers"] == {"Authorization": "Bearer SG.key"}
        payload = kwargs["json"]
        assert payload["subject"] == "GrowAGarden Stock Update"
        assert payload["personalizations"] == [{"to": [{"email": "me@example.com"}]}]
        assert payload["from"] == {"email": "me@example.com"}
        assert payload["content"] == [
            {"type": "text/plain", "value": "Stock update:\n\nA is back in stock\nB was added to stock"},
            {
                "type": "text/html",
                "value": "<p>Stock update:</p><ul><li>A is back in stock</li><li>B was added to stock</li></ul>",
            },
        ]

    def test_html_is_escaped(self):
        notifier = _notifier()
        notifier.send("s", ["<b>Corn</b> & Peas is back in stock"])

        html_body = notifier.session.post.call_args.kwargs["json"]["content"][1]["value"]
        assert "&lt;b&gt;Corn&lt;/b&gt; &amp; Peas" in html_body

    def test_request_is_time_bounded(self):
        notifier = _notifier()
        notifier.send("s", ["x"])
        assert notifier.session.post.call_args.kwargs["timeout"] == config.EMAIL_TIMEOUT_SECONDS
        assert config.EMAIL_TIMEOUT_SECONDS > 0

    def test_custom_timeout(self):
        notifier = EmailNotifier("SG.key", to_address="me@example.com", session=MagicMock(), timeout=5)
        notifier.session.post.return_value = MagicMock(status_code=202)
        notifier.send("s", ["x"])
        assert notifier.session.post.call_args.kwargs["timeout"] == 5

    def test_provider_rejects(self):
        notifier = _notifier(status_code=401)
        assert notifier.send("s", ["x"]) is False

    def test_transport_error(self):
        notifier = _notifier()
        notifier.session.post.side_effect = requests.ConnectionError("down")
        assert notifier.send("s", ["x"]) is False

    def test_disabled_without_key(self):
        notifier = _notifier(api_key=None)
        assert notifier.enabled is False
        assert notifier.send("s", ["x"]) is False
        notifier.session.post.assert_not_called()

    def test_distinct_sender(self):
        notifier = EmailNotifier("SG.key", to_address="me@example.com", from_address="alerts@example.com",
                                 session=MagicMock())
        notifier.session.post.return_value = MagicMock(status_code=202)
        notifier.send("s", ["x"])
        assert notifier.session.post.call_args.kwargs["json"]["from"] == {"email": "alerts@example.com"}
