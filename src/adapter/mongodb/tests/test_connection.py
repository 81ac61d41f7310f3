"""Tests for the shared MongoClient cache and its retry backoff."""

import unittest
from unittest.mock import MagicMock, patch

from pymongo.errors import ServerSelectionTimeoutError

from adapter.mongodb import connection
from adapter.mongodb.connection import RETRY_INTERVAL_SECONDS, get_mongodb_client, reset_client


def _client(ping_error=None):
    client = MagicMock()
    if ping_error is not None:
        client.admin.command.side_effect = ping_error
    return client


@patch.dict('os.environ', {'MONGO_URL': 'mongodb://db:27017'})
@patch('adapter.mongodb.connection.time.monotonic')
@patch('adapter.mongodb.connection.MongoClient')
class TestGetMongoDBClient(unittest.TestCase):

    def setUp(self):
        reset_client()

    def tearDown(self):
        connection._client_cache = None
        connection._retry_after = 0.0

    def test_connects_and_caches(self, mock_client_cls, mock_monotonic):
        mock_monotonic.return_value = 100.0
        client = _client()
        mock_client_cls.return_value = client

        self.assertIs(get_mongodb_client(), client)
        self.assertIs(get_mongodb_client(), client)

        mock_client_cls.assert_called_once()
        self.assertEqual(mock_client_cls.call_args.args, ('mongodb://db:27017',))
        self.assertTrue(mock_client_cls.call_args.kwargs['tz_aware'])

    def test_failed_first_connection_recovers_after_interval(self, mock_client_cls, mock_monotonic):
        down = _client(ServerSelectionTimeoutError("db starting"))
        up = _client()
        mock_client_cls.side_effect = [down, up]

        mock_monotonic.return_value = 100.0
        self.assertIsNone(get_mongodb_client())
        down.close.assert_called_once()

        mock_monotonic.return_value = 100.0 + RETRY_INTERVAL_SECONDS
        self.assertIs(get_mongodb_client(), up)
        self.assertEqual(mock_client_cls.call_count, 2)

    def test_no_reconnect_attempt_within_interval(self, mock_client_cls, mock_monotonic):
        mock_client_cls.return_value = _client(ServerSelectionTimeoutError("down"))

        mock_monotonic.return_value = 100.0
        self.assertIsNone(get_mongodb_client())
        mock_monotonic.return_value = 100.0 + RETRY_INTERVAL_SECONDS / 2
        self.assertIsNone(get_mongodb_client())

        mock_client_cls.assert_called_once()

    def test_failure_is_never_permanent(self, mock_client_cls, mock_monotonic):
        up = _client()
        mock_client_cls.side_effect = [
            _client(ServerSelectionTimeoutError("down")),
            _client(ServerSelectionTimeoutError("still down")),
            up,
        ]

        for attempt in range(3):
            mock_monotonic.return_value = 100.0 + attempt * RETRY_INTERVAL_SECONDS
            result = get_mongodb_client()

        self.assertIs(result, up)

    def test_cached_client_failing_ping_is_replaced(self, mock_client_cls, mock_monotonic):
        mock_monotonic.return_value = 100.0
        first = _client()
        second = _client()
        mock_client_cls.side_effect = [first, second]

        self.assertIs(get_mongodb_client(), first)
        first.admin.command.side_effect = ServerSelectionTimeoutError("lost")

        self.assertIs(get_mongodb_client(), second)
        first.close.assert_called_once()

    def test_missing_url_is_rechecked_after_interval(self, mock_client_cls, mock_monotonic):
        client = _client()
        mock_client_cls.return_value = client

        mock_monotonic.return_value = 100.0
        with patch.dict('os.environ', {'MONGO_URL': ''}):
            self.assertIsNone(get_mongodb_client())
        mock_client_cls.assert_not_called()

        mock_monotonic.return_value = 100.0 + RETRY_INTERVAL_SECONDS
        self.assertIs(get_mongodb_client(), client)

    def test_reset_client_clears_backoff(self, mock_client_cls, mock_monotonic):
        up = _client()
        mock_client_cls.side_effect = [_client(ServerSelectionTimeoutError("down")), up]
        mock_monotonic.return_value = 100.0

        self.assertIsNone(get_mongodb_client())
        reset_client()

        self.assertIs(get_mongodb_client(), up)


if __name__ == '__main__':
    unittest.main()
