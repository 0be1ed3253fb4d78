"""Tests for the gist and README sinks."""

import httpx
import pytest

from langbox.exceptions import GitHubAPIError, GitHubNotFoundError
from langbox.services.github_rest_client import GitHubRestClient
from langbox.services.publishers import (
    GistPublisher,
    ReadmePublisher,
    marker_pair,
    replace_marker_region,
)

START, END = marker_pair("lang-box")


class TestReplaceMarkerRegion:
    """Tests for marker-region replacement."""

    def test_replaces_only_interior(self):
        """Test that text outside the markers is preserved byte for byte."""
        head = "# Hi there\r\n\nSome intro ✨\n"
        tail = "\n\n## Footer\n  trailing spaces  \n"
        document = f"{head}{START}\nold stats\nmore old\n{END}{tail}"

        updated = replace_marker_region(document, START, END, "Python  1 file")

        assert updated == f"{head}{START}\n```\nPython  1 file\n```\n{END}{tail}"
        assert updated.startswith(head + START)
        assert updated.endswith(END + tail)

    def test_empty_region(self):
        """Test replacement when markers are adjacent."""
        updated = replace_marker_region(f"{START}{END}", START, END, "body")

        assert updated == f"{START}\n```\nbody\n```\n{END}"

    def test_idempotent(self):
        """Test that applying the same body twice changes nothing the second time."""
        document = f"intro\n{START}\n{END}\noutro"

        once = replace_marker_region(document, START, END, "body")
        twice = replace_marker_region(once, START, END, "body")

        assert once == twice

    def test_missing_start_marker(self):
        """Test that a missing start marker reports failure."""
        assert replace_marker_region(f"text\n{END}\n", START, END, "body") is None

    def test_missing_end_marker(self):
        """Test that a missing end marker reports failure."""
        assert replace_marker_region(f"{START}\ntext\n", START, END, "body") is None

    def test_inverted_markers(self):
        """Test that an end marker before the start marker reports failure."""
        assert replace_marker_region(f"{END}\ntext\n{START}\n", START, END, "body") is None

    def test_end_marker_before_region(self):
        """Test that a stray end marker ahead of the region rejects the document."""
        document = f"{END}\nintro\n{START}\nold\n{END}\n"

        assert replace_marker_region(document, START, END, "body") is None

    def test_marker_pair(self):
        """Test marker construction from a name."""
        assert marker_pair("LANGUAGE_STATS") == (
            "<!-- LANGUAGE_STATS start -->",
            "<!-- LANGUAGE_STATS end -->",
        )


class TestGistPublisher:
    """Tests for the gist sink."""

    @pytest.mark.asyncio
    async def test_updates_first_file(self, mock_client):
        """Test that the first gist file is renamed and rewritten."""
        mock_client.get_gist.return_value = {"files": {"old-name.md": {}, "other.md": {}}}
        publisher = GistPublisher(mock_client, "gist123", "Recent languages")

        assert await publisher.publish("content") is True

        mock_client.update_gist.assert_awaited_once_with(
            "gist123",
            {"old-name.md": {"filename": "Recent languages", "content": "content"}},
        )

    @pytest.mark.asyncio
    async def test_gist_without_files(self, mock_client):
        """Test that an empty gist gets a file named after the title."""
        mock_client.get_gist.return_value = {"files": {}}
        publisher = GistPublisher(mock_client, "gist123", "Recent languages")

        assert await publisher.publish("content") is True

        mock_client.update_gist.assert_awaited_once_with(
            "gist123",
            {"Recent languages": {"filename": "Recent languages", "content": "content"}},
        )

    @pytest.mark.asyncio
    async def test_api_error_reports_failure(self, mock_client):
        """Test that API errors are reported, not raised."""
        mock_client.get_gist.side_effect = GitHubNotFoundError("Resource not found: /gists/x")
        publisher = GistPublisher(mock_client, "x", "title")

        assert await publisher.publish("content") is False
        mock_client.update_gist.assert_not_called()

    @pytest.mark.asyncio
    async def test_transport_error_reports_failure(self, mock_client):
        """Test that transport errors are reported, not raised."""
        mock_client.get_gist.return_value = {"files": {"a": {}}}
        mock_client.update_gist.side_effect = httpx.ReadTimeout("timed out")
        publisher = GistPublisher(mock_client, "gist123", "title")

        assert await publisher.publish("content") is False


class TestReadmePublisher:
    """Tests for the README section sink."""

    @pytest.mark.asyncio
    async def test_commits_updated_document(self, mock_client):
        """Test that the marker region is rewritten and committed."""
        document = f"# Me\n{START}\nold\n{END}\nbye\n"
        mock_client.get_file_contents.return_value = (document, "blobsha")
        publisher = ReadmePublisher(mock_client, "octocat/octocat")

        assert await publisher.publish("new stats") is True

        mock_client.get_file_contents.assert_awaited_once_with("octocat/octocat", "README.md")
        repo, path, content, sha, message = mock_client.put_file_contents.call_args.args
        assert (repo, path, sha) == ("octocat/octocat", "README.md", "blobsha")
        assert content == f"# Me\n{START}\n```\nnew stats\n```\n{END}\nbye\n"
        assert message

    @pytest.mark.asyncio
    async def test_custom_marker_and_path(self, mock_client):
        """Test that marker name and path are honoured."""
        start, end = marker_pair("STATS")
        mock_client.get_file_contents.return_value = (f"{start}{end}", "sha")
        publisher = ReadmePublisher(mock_client, "octocat/site", path="docs/index.md", marker="STATS")

        assert await publisher.publish("x") is True

        mock_client.get_file_contents.assert_awaited_once_with("octocat/site", "docs/index.md")

    @pytest.mark.asyncio
    async def test_missing_markers_leave_document_untouched(self, mock_client):
        """Test that nothing is written when markers are absent."""
        mock_client.get_file_contents.return_value = ("# Me\nno markers here\n", "sha")
        publisher = ReadmePublisher(mock_client, "octocat/octocat")

        assert await publisher.publish("new stats") is False
        mock_client.put_file_contents.assert_not_called()

    @pytest.mark.asyncio
    async def test_unchanged_document_skips_commit(self, mock_client):
        """Test that an up-to-date README is not committed again."""
        document = f"{START}\n```\nsame\n```\n{END}"
        mock_client.get_file_contents.return_value = (document, "sha")
        publisher = ReadmePublisher(mock_client, "octocat/octocat")

        assert await publisher.publish("same") is True
        mock_client.put_file_contents.assert_not_called()

    @pytest.mark.asyncio
    async def test_write_error_reports_failure(self, mock_client):
        """Test that a rejected commit is reported, not raised."""
        mock_client.get_file_contents.return_value = (f"{START}{END}", "sha")
        mock_client.put_file_contents.side_effect = GitHubAPIError("Conflict", status_code=409)
        publisher = ReadmePublisher(mock_client, "octocat/octocat")

        assert await publisher.publish("x") is False

    @pytest.mark.asyncio
    async def test_directory_path_reports_failure(self, test_config):
        """Test that a README_PATH naming a directory fails the sink without raising."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[{"name": "a.md", "type": "file"}])

        client = GitHubRestClient(test_config, transport=httpx.MockTransport(handler))
        publisher = ReadmePublisher(client, "octocat/octocat", path="docs")

        async with client:
            assert await publisher.publish("x") is False

        assert [r.method for r in seen] == ["GET"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"type": "file", "content": "IyBIaQo="},
            {"type": "file", "sha": "s", "content": "not base64!"},
            {"type": "symlink", "sha": "s", "target": "../README.md"},
        ],
    )
    async def test_unusable_contents_report_failure(self, test_config, payload):
        """Test that malformed contents responses fail the sink without raising."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=payload)

        client = GitHubRestClient(test_config, transport=httpx.MockTransport(handler))
        publisher = ReadmePublisher(client, "octocat/octocat")

        async with client:
            assert await publisher.publish("x") is False
