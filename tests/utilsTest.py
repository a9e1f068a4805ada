# SPDX-License-Identifier: MIT

import unittest
from urllib.parse import parse_qs, urlsplit

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from discord_passport import Route, SnowflakeRangeError, SnowflakeTypeError
from discord_passport import utils

console = Console()


class UtilsTest(unittest.TestCase):
    def setUp(self):
        console.print(Panel(Text(f"Running: {self._testMethodName}", style="bold cyan")))

    def test_is_snowflake(self):
        self.assertTrue(utils.is_snowflake("123456789012345678"))
        self.assertFalse(utils.is_snowflake("12345678901234567"))
        self.assertFalse(utils.is_snowflake("abc12345678901234"))
        self.assertFalse(utils.is_snowflake(123456789012345678))

    def test_validate_snowflake(self):
        self.assertEqual(utils.validate_snowflake("123456789012345678"), "123456789012345678")
        with self.assertRaises(SnowflakeRangeError):
            utils.validate_snowflake("1234567890123456789")
        with self.assertRaises(SnowflakeTypeError):
            utils.validate_snowflake("-12345678901234567")
        with self.assertRaises(SnowflakeTypeError):
            utils.validate_snowflake(None)

    def test_validate_snowflake_rejects_unicode_digits(self):
        with self.assertRaises(SnowflakeTypeError):
            utils.validate_snowflake("１" * 18)

    def test_oauth_url(self):
        url = utils.oauth_url(
            "1100",
            redirect_uri="https://example.com/callback",
            scope=["identify", "guilds.join"],
            state="xyz",
        )
        parts = urlsplit(url)
        self.assertEqual(f"{parts.scheme}://{parts.netloc}{parts.path}", utils.AUTHORIZE_URL)
        self.assertEqual(
            parse_qs(parts.query),
            {
                "client_id": ["1100"],
                "redirect_uri": ["https://example.com/callback"],
                "response_type": ["code"],
                "scope": ["identify guilds.join"],
                "state": ["xyz"],
            },
        )

    def test_oauth_url_without_state(self):
        url = utils.oauth_url("1100", redirect_uri="https://example.com/callback", scope=["identify"])
        self.assertNotIn("state", parse_qs(urlsplit(url).query))

    def test_route_quotes_parameters(self):
        route = Route("PUT", "/guilds/{guild_id}/members/{user_id}", guild_id="1/../2", user_id="3")
        self.assertEqual(route.url_path, "/guilds/1%2F..%2F2/members/3")
        self.assertEqual(route.url(), "https://discord.com/api/guilds/1%2F..%2F2/members/3")
        self.assertEqual(route.url("http://localhost/api/"), "http://localhost/api/guilds/1%2F..%2F2/members/3")


if __name__ == "__main__":
    unittest.main()
