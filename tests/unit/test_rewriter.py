"""Unit tests for the article rewriter."""

from blogfixer.services.analyzer import analyze_article
from blogfixer.services.rewriter import alt_text_from_src, fix_article_content, is_wrapped


class TestAltTextFromSrc:
    """Tests for alt_text_from_src."""

    def test_uses_file_name(self) -> None:
        """Should turn the file name into words."""
        src = "https://cdn.shopify.com/s/files/red_running-shoe.jpg?v=1700000000"
        assert alt_text_from_src(src) == "red running shoe"

    def test_falls_back_when_no_name(self) -> None:
        """Should use the fallback when the URL has no file name."""
        assert alt_text_from_src("https://cdn.example.com/") == "Blog image"


class TestFixArticleContent:
    """Tests for fix_article_content."""

    def test_empty_content(self) -> None:
        """Should return an empty string for empty content."""
        assert fix_article_content("") == ""
        assert fix_article_content(None) == ""

    def test_wraps_in_container(self) -> None:
        """Should wrap the cleaned content in a blog-content div."""
        assert fix_article_content("<p>Hello</p>") == '<div class="blog-content"><p>Hello</p></div>'

    def test_removes_head_block(self) -> None:
        """Should remove the whole <head> block including nested tags."""
        content = (
            "<head><title>Old <b>bold</b></title><style>p{color:red}</style>"
            '<script src="x.js"></script></head><p>Body text</p>'
        )
        fixed = fix_article_content(content)
        assert "<head" not in fixed
        assert "</head>" not in fixed
        assert "color:red" not in fixed
        assert "x.js" not in fixed
        assert "<p>Body text</p>" in fixed

    def test_removes_document_wrappers(self) -> None:
        """Should strip html, body, title, meta and link tags."""
        content = (
            '<html lang="en"><body class="a"><title>T</title>'
            '<meta name="description" content="d"><link rel="stylesheet" href="s.css">'
            "<p>Text</p></body></html>"
        )
        assert fix_article_content(content) == '<div class="blog-content"><p>Text</p></div>'

    def test_keeps_header_element(self) -> None:
        """Should not treat <header> as <head>."""
        fixed = fix_article_content("<header><h1>Hi</h1></header><p>x</p></head>")
        assert "<header><h1>Hi</h1></header>" in fixed

    def test_adds_alt_and_lazy_loading(self) -> None:
        """Should add alt text from the file name and lazy loading."""
        fixed = fix_article_content('<img src="/files/blue-widget_2.png">')
        assert '<img src="/files/blue-widget_2.png" alt="blue widget 2" loading="lazy">' in fixed

    def test_fallback_alt_without_src(self) -> None:
        """Should use the fallback alt text when there is no src."""
        fixed = fix_article_content('<img data-src="x.png">')
        assert 'alt="Blog image"' in fixed

    def test_keeps_existing_alt_and_loading(self) -> None:
        """Should not touch attributes that are already present."""
        img = '<img src="a.jpg" alt="Existing" loading="eager">'
        assert fix_article_content(img) == f'<div class="blog-content">{img}</div>'

    def test_self_closing_img(self) -> None:
        """Should keep the self-closing slash at the end of the tag."""
        fixed = fix_article_content('<img src="cat.jpg" />')
        assert '<img src="cat.jpg" alt="cat" loading="lazy" />' in fixed

    def test_collapses_blank_lines(self) -> None:
        """Should collapse runs of blank lines and trim the ends."""
        fixed = fix_article_content("\n\n<p>One</p>\n\n\n\n  \n<p>Two</p>\n\n")
        assert fixed == '<div class="blog-content"><p>One</p>\n\n<p>Two</p></div>'

    def test_fixed_content_has_no_issues(self) -> None:
        """Fixed content should pass the analyzer."""
        content = '<body><p>A</p></body><body><img src="x.jpg"></body>'
        assert analyze_article(content).has_issues is True
        assert analyze_article(fix_article_content(content)).has_issues is False

    def test_second_pass_does_not_rewrap(self) -> None:
        """Rewriting already fixed content should leave it unchanged."""
        content = '<html><body><p>Hi</p><img src="dog.jpg"><div><p>x</p></div></body></html>'
        once = fix_article_content(content)
        twice = fix_article_content(once)
        assert twice == once
        assert twice.count('class="blog-content"') == 1


class TestIsWrapped:
    """Tests for is_wrapped."""

    def test_single_container(self) -> None:
        """Should detect content that is exactly one container."""
        assert is_wrapped('<div class="blog-content"><div>a</div><p>b</p></div>') is True

    def test_container_followed_by_more(self) -> None:
        """Should not treat a leading container with trailing siblings as wrapped."""
        assert is_wrapped('<div class="blog-content">a</div><div>b</div>') is False

    def test_unwrapped(self) -> None:
        """Should not treat other content as wrapped."""
        assert is_wrapped("<p>a</p>") is False


class TestAltTextEntities:
    """Tests for image sources that contain HTML entities."""

    def test_entity_in_src_is_escaped_once(self) -> None:
        """An entity in the src should not be escaped a second time in the alt text."""
        fixed = fix_article_content('<img src="/files/salt&amp;pepper.jpg">')
        assert 'alt="salt&amp;pepper"' in fixed
        assert "&amp;amp;" not in fixed

    def test_alt_text_from_escaped_src(self) -> None:
        """Should derive alt text from the unescaped file name."""
        assert alt_text_from_src("/files/salt&amp;pepper.jpg") == "salt&pepper"
