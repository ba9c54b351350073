"""Tests for ingest_blogs.feed_parser module."""

from ingest_blogs.feed_parser import EXCERPT_CHARS, parse_feed_page


class TestParseSyndication:
    def test_parses_all_items_in_order(self, make_feed, make_item) -> None:
        slugs = [f"post-{i}" for i in range(25)]
        page = make_feed(make_item(slug) for slug in slugs)

        items = parse_feed_page(page)

        assert [item.link for item in items] == [f"https://skids.clinic/blog/{slug}" for slug in slugs]

    def test_entry_fields(self, make_feed, make_item) -> None:
        item = make_item(
            "toddler-sleep",
            title="Toddler Sleep &amp; Routines",
            link="https://www.skids.clinic/blog/toddler-sleep/?utm_source=rss",
            description="<p>Bedtime routines help toddlers settle.</p>",
            extra="<category><![CDATA[Sleep]]></category>",
        )

        [article] = parse_feed_page(make_feed([item]))

        assert article.title == "Toddler Sleep & Routines"
        assert article.link == "https://skids.clinic/blog/toddler-sleep"
        assert article.published_at == "Mon, 05 Feb 2024 08:00:00 +0000"
        assert article.excerpt == "Bedtime routines help toddlers settle."
        assert article.keywords[0] == "sleep"
        assert "toddlers" in article.keywords

    def test_excerpt_truncated(self, make_feed, make_item) -> None:
        long_text = "word " * 200
        [article] = parse_feed_page(make_feed([make_item("long", description=long_text)]))
        assert 0 < len(article.excerpt) <= EXCERPT_CHARS

    def test_media_content_preferred(self, make_feed, make_item) -> None:
        extra = (
            '<media:content url="https://skids.clinic/uploads/media.jpg" medium="image"/>'
            '<enclosure url="https://skids.clinic/uploads/enclosure.jpg" type="image/jpeg" length="1"/>'
        )
        [article] = parse_feed_page(make_feed([make_item("a-post", extra=extra)]))
        assert article.image_url == "https://skids.clinic/uploads/media.jpg"

    def test_enclosure_used_without_media(self, make_feed, make_item) -> None:
        extra = '<enclosure url="https://skids.clinic/uploads/enclosure.jpg" type="image/jpeg" length="1"/>'
        [article] = parse_feed_page(make_feed([make_item("a-post", extra=extra)]))
        assert article.image_url == "https://skids.clinic/uploads/enclosure.jpg"

    def test_inline_image_skips_logo(self, make_feed, make_item) -> None:
        body = (
            '<p><img src="https://skids.clinic/uploads/skids-logo.png"/>'
            '<img src="https://skids.clinic/uploads/sleep.jpg"/>Body text</p>'
        )
        extra = f"<content:encoded><![CDATA[{body}]]></content:encoded>"
        [article] = parse_feed_page(make_feed([make_item("a-post", extra=extra)]))
        assert article.image_url == "https://skids.clinic/uploads/sleep.jpg"

    def test_logo_only_leaves_image_empty(self, make_feed, make_item) -> None:
        extra = '<media:content url="https://skids.clinic/uploads/logo.png" medium="image"/>'
        [article] = parse_feed_page(make_feed([make_item("a-post", extra=extra)]))
        assert article.image_url == ""

    def test_drops_invalid_and_duplicate_records(self, make_feed, make_item) -> None:
        page = make_feed([
            make_item("first", title="First"),
            make_item("elsewhere", link="https://other.example/blog/elsewhere"),
            make_item("first", title="First Again"),
            make_item("untitled", title=""),
            make_item("about", link="https://skids.clinic/about-us"),
        ])

        items = parse_feed_page(page)

        assert [(i.title, i.link) for i in items] == [("First", "https://skids.clinic/blog/first")]

    def test_empty_body(self) -> None:
        assert parse_feed_page(b"") == []


CARDS_PAGE = """
<html><body>
<div class="posts">
  <article class="post">
    <a href="/blog/first-steps/"><img src="/uploads/first.jpg"></a>
    <h2><a href="/blog/first-steps/">First Steps at 12 Months</a></h2>
    <time datetime="2024-03-01T10:00:00Z">March 1</time>
    <p>Most babies walk between 9 and 15 months.</p>
    <span class="category">Motor Skills</span>
  </article>
  <article class="post">
    <img src="/uploads/site-logo.png">
    <h2><a href="https://skids.clinic/blog/picky-eating">Picky Eating</a></h2>
  </article>
  <div class="card"><a href="https://other.example/blog/x">Elsewhere</a></div>
</div>
</body></html>
"""


class TestParseHtmlCards:
    def test_falls_back_to_cards(self) -> None:
        items = parse_feed_page(CARDS_PAGE)

        assert [i.link for i in items] == [
            "https://skids.clinic/blog/first-steps",
            "https://skids.clinic/blog/picky-eating",
        ]

    def test_card_fields(self) -> None:
        first, second = parse_feed_page(CARDS_PAGE)

        assert first.title == "First Steps at 12 Months"
        assert first.published_at == "2024-03-01T10:00:00Z"
        assert first.excerpt == "Most babies walk between 9 and 15 months."
        assert first.image_url == "https://skids.clinic/uploads/first.jpg"
        assert first.keywords[:6] == ("motor skills", "motor", "skills", "babies", "12-months", "15-months")
        assert second.image_url == ""

    def test_nested_cards_not_duplicated(self) -> None:
        page = """
        <html><body>
          <div class="card"><div class="post">
            <h3><a href="/blog/nested">Nested Post</a></h3>
          </div></div>
        </body></html>
        """
        items = parse_feed_page(page)
        assert [i.title for i in items] == ["Nested Post"]
