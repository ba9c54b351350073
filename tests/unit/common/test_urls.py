"""Tests for common.urls module."""

import pytest

from common.urls import absolutize, article_id_from_link, canonicalize_link, is_http_url, is_logo_asset


class TestCanonicalizeLink:
    def test_absolute_link_passthrough(self) -> None:
        assert canonicalize_link("https://skids.clinic/blog/toddler-sleep") == "https://skids.clinic/blog/toddler-sleep"

    def test_strips_query_fragment_and_trailing_slash(self) -> None:
        link = "https://skids.clinic/blog/toddler-sleep/?utm_source=x#comments"
        assert canonicalize_link(link) == "https://skids.clinic/blog/toddler-sleep"

    def test_www_host_normalized(self) -> None:
        assert canonicalize_link("https://www.skids.clinic/blog/a-post") == "https://skids.clinic/blog/a-post"

    def test_relative_link_resolved(self) -> None:
        assert canonicalize_link("/blog/a-post/") == "https://skids.clinic/blog/a-post"

    def test_http_scheme_upgraded_to_site_scheme(self) -> None:
        assert canonicalize_link("http://skids.clinic/blog/a-post") == "https://skids.clinic/blog/a-post"

    @pytest.mark.parametrize(
        "link",
        [
            None,
            "",
            "https://evil.example/blog/a-post",
            "https://skids.clinic.evil.example/blog/a-post",
            "https://skids.clinic/about",
            "https://skids.clinic/blog/",
            "https://skids.clinic:8080/blog/a-post",
            "ftp://skids.clinic/blog/a-post",
            "javascript:alert(1)",
            "https://skids.clinic/blog/a post",
        ],
    )
    def test_rejects_invalid_links(self, link) -> None:
        assert canonicalize_link(link) is None

    def test_custom_site(self) -> None:
        assert canonicalize_link("/posts/x", "https://example.org", "/posts/") == "https://example.org/posts/x"


class TestArticleIdFromLink:
    def test_last_segment(self) -> None:
        assert article_id_from_link("https://skids.clinic/blog/2024/first-steps") == "first-steps"

    def test_no_path(self) -> None:
        assert article_id_from_link("https://skids.clinic") == ""


class TestIsLogoAsset:
    @pytest.mark.parametrize(
        "url",
        [
            "https://skids.clinic/wp-content/uploads/logo.png",
            "https://cdn.example/img/Logo-dark.svg",
            "https://cdn.example/site_logo_2x.webp",
            "https://cdn.example/proxy?u=https%3A%2F%2Fskids.clinic%2Flogo.png",
            "https://cdn.example/proxy?u=https%253A%252F%252Fskids.clinic%252FLOGO.png",
        ],
    )
    def test_logo_detected(self, url) -> None:
        assert is_logo_asset(url)

    def test_article_art_not_logo(self) -> None:
        assert not is_logo_asset("https://skids.clinic/wp-content/uploads/toddler.jpg")

    def test_empty(self) -> None:
        assert not is_logo_asset(None)


class TestAbsolutize:
    def test_relative_resolved(self) -> None:
        assert absolutize("/img/a.jpg", "https://skids.clinic/blog/x") == "https://skids.clinic/img/a.jpg"

    def test_data_url_rejected(self) -> None:
        assert absolutize("data:image/png;base64,AAAA", "https://skids.clinic/") is None

    def test_protocol_relative(self) -> None:
        assert absolutize("//cdn.example/a.jpg", "https://skids.clinic/") == "https://cdn.example/a.jpg"

    def test_is_http_url(self) -> None:
        assert is_http_url("https://a.example/x")
        assert not is_http_url("mailto:a@b.c")

    @pytest.mark.parametrize("url", ["https://xn--zz.com/a.png", "https://exämple..com/a.png"])
    def test_unencodable_host_rejected(self, url) -> None:
        assert absolutize(url, "https://skids.clinic/") is None

    def test_international_host_kept(self) -> None:
        assert absolutize("https://bücher.example/a.png", "https://skids.clinic/") == "https://bücher.example/a.png"
