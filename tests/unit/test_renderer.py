from event_pages.services.renderer import (
    escape_html,
    format_timestamp,
    render_event_page,
    select_template,
)


def test_escape_html_covers_special_characters():
    assert escape_html("""<a href="x">Tom & 'Jerry'</a>""") == (
        "&lt;a href=&quot;x&quot;&gt;Tom &amp; &#39;Jerry&#39;&lt;/a&gt;"
    )
    assert escape_html(None) == ""


def test_text_fields_are_escaped():
    html = render_event_page({
        "eventName": "<script>alert('x')</script>",
        "description": "Fish & Chips",
    })

    assert "<script>alert" not in html
    assert "&lt;script&gt;alert(&#39;x&#39;)&lt;/script&gt;" in html
    assert "Fish &amp; Chips" in html


def test_urls_are_escaped():
    html = render_event_page({
        "eventName": "Conf",
        "heroImage": 'https://cdn.test/a.png" onerror="alert(1)',
        "videos": ['https://video.test/"><script>x</script>'],
    })

    assert '" onerror="' not in html
    assert "&quot; onerror=&quot;" in html
    assert "<script>x</script>" not in html


def test_missing_fields_render_placeholders():
    html = render_event_page({})

    assert "Untitled Event" in html
    assert "No speakers listed" in html
    assert "No agenda items" in html
    assert "No partners" in html
    assert "No videos" in html


def test_template_selection():
    assert select_template({"selectedTemplate": "2"}) == "2"
    assert select_template({"selectedTemplate": "1", "template": "modern"}) == "1"
    assert select_template({"template": "Modern"}) == "2"
    assert select_template({"template": "classic"}) == "1"
    assert select_template({}) == "1"

    assert "#0f172a" in render_event_page({"selectedTemplate": "2"})
    assert "#0f172a" not in render_event_page({"selectedTemplate": "1"})


def test_classic_page_content():
    html = render_event_page({
        "eventId": "evt-1",
        "createdAt": 0,
        "eventName": "Conf",
        "eventDate": "2025-01-01",
        "heroImage": "https://assets.test/banners/evt-1_banner.png",
        "speakers": [{"name": "Ada", "role": "Keynote", "photo": ""}],
        "agenda": [{"title": "Opening", "time": "09:00"}],
        "sponsors": [{"name": "Acme", "logo": "https://assets.test/acme.png"}],
        "organizer": "Org Team",
        "whatsapp": "+1 (555) 010",
    })

    assert '<img class="banner" src="https://assets.test/banners/evt-1_banner.png"' in html
    assert "Ada" in html and "Keynote" in html
    assert "Opening" in html
    assert 'src="https://assets.test/acme.png"' in html
    assert "https://wa.me/1555010" in html
    assert "Event ID: evt-1" in html
    assert "1970-01-01 00:00 UTC" in html


def test_legacy_record_shape():
    html = render_event_page({
        "title": "Old Meetup",
        "date": "2023-05-05",
        "template": "classic",
        "bannerUrl": "https://assets.test/old.png",
        "speakers": [{"name": "Grace", "designation": "Admiral"}],
        "partners": [{"name": "Navy", "logo": "https://assets.test/navy.png"}],
        "contact": {"organizer": "Legacy Org", "email": "legacy@test"},
    })

    assert "Old Meetup" in html
    assert "https://assets.test/old.png" in html
    assert "Admiral" in html
    assert "Navy" in html
    assert "mailto:legacy@test" in html
    assert "Legacy Org" in html


def test_modern_page_content():
    html = render_event_page({
        "selectedTemplate": "2",
        "eventName": "Summit",
        "heroImage": "https://assets.test/hero.png",
        "highlights": [{"title": "Workshops", "description": "Hands on"}],
        "sponsors": [{"name": "Acme", "logo": ""}],
    })

    assert "Summit" in html
    assert "https://assets.test/hero.png" in html
    assert "Workshops" in html
    assert "<div>Acme</div>" in html


def test_format_timestamp():
    assert format_timestamp(0) == "1970-01-01 00:00 UTC"
    assert format_timestamp("1735689600000") == "2025-01-01 00:00 UTC"
    assert format_timestamp("soon") == "soon"
    assert format_timestamp(None) == ""
