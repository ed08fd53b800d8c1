from app.mappers.image_extractor import extract_image_urls, resolve_url

PAGE = "https://www.booking.com/hotel/us/riverlake.html"


def test_og_and_twitter_images_in_document_order():
    html = """
    <html><head>
    <meta property="og:image" content="https://cdn.example/a.jpg">
    <meta name="twitter:image" content="/img/b.jpg">
    <meta property="og:image" content="https://cdn.example/a.jpg">
    <meta property="og:title" content="Riverlake">
    </head><body><img src="/ignored.jpg"></body></html>
    """
    assert extract_image_urls(html, PAGE) == [
        "https://cdn.example/a.jpg",
        "https://www.booking.com/img/b.jpg",
    ]


def test_falls_back_to_first_img():
    html = '<html><body><img src="photos/1.jpg"><img src="photos/2.jpg"></body></html>'
    assert extract_image_urls(html, PAGE) == ["https://www.booking.com/hotel/us/photos/1.jpg"]


def test_lazy_load_attributes():
    html = (
        '<html><body>'
        '<img src="data:image/gif;base64,R0lGOD" data-src="https://cdn.example/lazy.jpg">'
        '</body></html>'
    )
    assert extract_image_urls(html, PAGE) == ["https://cdn.example/lazy.jpg"]


def test_srcset_first_entry():
    html = '<html><body><img srcset="/s/1x.jpg 1x, /s/2x.jpg 2x"></body></html>'
    assert extract_image_urls(html, PAGE) == ["https://www.booking.com/s/1x.jpg"]


def test_skips_img_without_source():
    html = '<html><body><img alt="x"><img data-original="/o.jpg"></body></html>'
    assert extract_image_urls(html, PAGE) == ["https://www.booking.com/o.jpg"]


def test_no_images():
    assert extract_image_urls("<html><body><p>none</p></body></html>", PAGE) == []


def test_resolve_url_keeps_raw_on_failure():
    assert resolve_url(PAGE, "http://[bad") == "http://[bad"
