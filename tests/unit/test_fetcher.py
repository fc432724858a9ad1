from __future__ import annotations

import httpx
import pytest
import yt_dlp

from recipe_box.services import fetcher
from recipe_box.services.errors import FetchError
from recipe_box.services.ids import extract_video_id, is_youtube_url

RECIPE_PAGE = """
<html>
  <head>
    <title>Curry</title>
    <style type="text/css">
      body { color: red; }
    </style>
    <SCRIPT>var tracking = "<b>not content</b>";</SCRIPT>
  </head>
  <body>
    <h1>Chicken   curry</h1>
    <ul><li>chicken</li><li>onion</li></ul>
    <script src="app.js"></script>
    <p>Simmer for
       20 minutes.</p>
  </body>
</html>
"""


def _client_for(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class YoutubeDLStub:
    info: dict | None = {"description": "Ingredients: rice, egg"}
    error: Exception | None = None
    requested_urls: list[str] = []

    def __init__(self, opts: dict) -> None:
        self.opts = opts

    def __enter__(self) -> "YoutubeDLStub":
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None

    def extract_info(self, url: str, download: bool = False) -> dict | None:
        type(self).requested_urls.append(url)
        if type(self).error is not None:
            raise type(self).error
        return type(self).info


@pytest.fixture
def youtube_stub(monkeypatch: pytest.MonkeyPatch) -> type[YoutubeDLStub]:
    YoutubeDLStub.info = {"description": "Ingredients: rice, egg"}
    YoutubeDLStub.error = None
    YoutubeDLStub.requested_urls = []
    monkeypatch.setattr(fetcher.yt_dlp, "YoutubeDL", YoutubeDLStub)
    return YoutubeDLStub


class TestYoutubeUrlDetection:
    @pytest.mark.parametrize(
        "url",
        [
            "https://www.youtube.com/watch?v=abcdEFGH123",
            "http://youtube.com/shorts/abcdEFGH123",
            "youtu.be/abcdEFGH123",
            "www.youtube.com/watch?v=abcdEFGH123",
        ],
    )
    def test_video_urls(self, url: str) -> None:
        assert is_youtube_url(url) is True

    @pytest.mark.parametrize(
        "url",
        ["https://example.com/recipe", "https://m.youtube.com/watch?v=abcdEFGH123", "https://youtu.be/"],
    )
    def test_other_urls(self, url: str) -> None:
        assert is_youtube_url(url) is False


class TestExtractVideoId:
    def test_short_link(self) -> None:
        assert extract_video_id("https://youtu.be/abcdEFGH123") == "abcdEFGH123"

    def test_watch_query_parameter(self) -> None:
        assert extract_video_id("https://www.youtube.com/watch?v=abcdEFGH123&t=42") == "abcdEFGH123"

    def test_bare_identifier(self) -> None:
        assert extract_video_id("abcdEFGH123") == "abcdEFGH123"

    def test_malformed_url(self) -> None:
        assert extract_video_id("https://www.youtube.com/watch?v=short") is None


class TestHtmlToText:
    def test_strips_scripts_styles_and_tags(self) -> None:
        text = fetcher.html_to_text(RECIPE_PAGE)

        assert text == "Curry Chicken curry chicken onion Simmer for 20 minutes."
        assert "tracking" not in text
        assert "color" not in text

    def test_truncates_by_characters(self) -> None:
        html = "<p>" + "あ" * 50 + "</p>"
        assert fetcher.html_to_text(html, max_chars=10) == "あ" * 10

    def test_default_limit_is_8000_characters(self) -> None:
        html = "<div>" + "x" * 9000 + "</div>"
        assert len(fetcher.html_to_text(html)) == 8000

    def test_is_deterministic(self) -> None:
        assert fetcher.html_to_text(RECIPE_PAGE) == fetcher.html_to_text(RECIPE_PAGE)


class TestFetchPageText:
    def test_success(self) -> None:
        client = _client_for(lambda request: httpx.Response(200, text=RECIPE_PAGE))

        text = fetcher.fetch_page_text("https://example.com/recipe", client=client)

        assert text.startswith("Curry Chicken curry")

    def test_same_page_twice_gives_same_text(self) -> None:
        client = _client_for(lambda request: httpx.Response(200, text=RECIPE_PAGE))

        first = fetcher.fetch_text("https://example.com/recipe", client=client)
        second = fetcher.fetch_text("https://example.com/recipe", client=client)

        assert first == second

    def test_non_success_status_raises(self) -> None:
        client = _client_for(lambda request: httpx.Response(404))

        with pytest.raises(FetchError) as exc_info:
            fetcher.fetch_page_text("https://example.com/missing", client=client)

        assert "404" in str(exc_info.value)
        assert "Not Found" in str(exc_info.value)

    def test_transport_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(FetchError) as exc_info:
            fetcher.fetch_page_text("https://example.com/recipe", client=_client_for(handler))

        assert "connection refused" in str(exc_info.value)


class TestFetchYoutube:
    def test_returns_description(self, youtube_stub: type[YoutubeDLStub]) -> None:
        text = fetcher.fetch_text("https://youtu.be/abcdEFGH123")

        assert text == "Ingredients: rice, egg"
        assert youtube_stub.requested_urls == ["https://www.youtube.com/watch?v=abcdEFGH123"]

    def test_missing_description_is_empty(self, youtube_stub: type[YoutubeDLStub]) -> None:
        youtube_stub.info = {"title": "No description"}

        assert fetcher.fetch_text("https://www.youtube.com/watch?v=abcdEFGH123") == ""

    def test_invalid_identifier_raises(self, youtube_stub: type[YoutubeDLStub]) -> None:
        with pytest.raises(FetchError) as exc_info:
            fetcher.fetch_text("https://www.youtube.com/watch?v=short")

        assert "video identifier" in str(exc_info.value)
        assert youtube_stub.requested_urls == []

    def test_download_error_raises(self, youtube_stub: type[YoutubeDLStub]) -> None:
        youtube_stub.error = yt_dlp.utils.DownloadError("Video unavailable")

        with pytest.raises(FetchError) as exc_info:
            fetcher.fetch_text("https://youtu.be/abcdEFGH123")

        assert "Video unavailable" in str(exc_info.value)
