"""
HTML rendering for stored events.

Two fixed layouts: template "1" (classic, light) and template "2" (modern,
dark). Both accept records written by the current create endpoint and the
older shape (``title``, ``date``, ``bannerUrl``, ``partners``, ``contact``).
Every interpolated value, URLs included, goes through ``escape_html``.
"""

import re
from datetime import datetime, timezone
from typing import Any


def escape_html(value: Any) -> str:
    if value is None:
        return ""
    return (
        str(value)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )


def format_timestamp(ts: Any) -> str:
    """Format a ms-since-epoch value; falls back to the raw value"""
    try:
        moment = datetime.fromtimestamp(int(ts) / 1000, tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        return "" if ts is None else str(ts)
    return moment.strftime("%Y-%m-%d %H:%M UTC")


def select_template(record: dict) -> str:
    selected = str(record.get("selectedTemplate") or "").strip()
    if selected in ("1", "2"):
        return selected
    if str(record.get("template") or "").strip().lower() == "modern":
        return "2"
    return "1"


def _list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _entries(value: Any) -> list[dict]:
    return [item for item in _list(value) if isinstance(item, dict)]


def _contact(record: dict, name: str) -> str:
    contact = record.get("contact")
    contact = contact if isinstance(contact, dict) else {}
    return str(record.get(name) or contact.get(name) or "")


def _page_fields(record: dict) -> dict:
    """Pull the fields both templates need, tolerating either record shape"""
    videos = [v for v in _list(record.get("videos")) if isinstance(v, str) and v]
    if record.get("videoEmbedUrl"):
        videos.insert(0, record["videoEmbedUrl"])

    speakers = [
        {
            "name": s.get("name") or "",
            "role": s.get("role") or s.get("designation") or "",
            "topic": s.get("topic") or "",
            "photo": s.get("photo") or "",
        }
        for s in _entries(record.get("speakers"))
    ]

    return {
        "title": record.get("eventName") or record.get("title") or "Untitled Event",
        "date": record.get("eventDate") or record.get("date") or "",
        "time": record.get("eventTime") or "",
        "venue": record.get("venue") or "",
        "banner": record.get("heroImage") or record.get("bannerUrl") or "",
        "logo": record.get("eventLogo") or "",
        "about_title": record.get("aboutTitle") or "About",
        "description": record.get("description") or "",
        "objectives": [o for o in _list(record.get("objectives")) if isinstance(o, str)],
        "speakers": speakers,
        "agenda": _entries(record.get("agenda")),
        "highlights": _entries(record.get("highlights")),
        "partners": _entries(record.get("sponsors") or record.get("partners")),
        "videos": videos,
        "organizer": _contact(record, "organizer"),
        "email": _contact(record, "email"),
        "phone": _contact(record, "phone"),
        "whatsapp": _contact(record, "whatsapp"),
        "map": record.get("mapEmbedUrl") or "",
        "footer_logo": record.get("footerLogo") or "",
        "event_id": record.get("eventId") or "",
        "created": format_timestamp(record.get("createdAt")),
    }


CLASSIC_CSS = """
  :root{--yellow:#f6d34a;--black:#111;--muted:#666}
  body{font-family:system-ui,-apple-system,Segoe UI,Roboto,'Helvetica Neue',Arial;margin:0;background:#fff;color:var(--black);line-height:1.4}
  .hero{background:linear-gradient(180deg,rgba(0,0,0,0.25),transparent), #f8e785;padding:40px 20px;text-align:center}
  .container{max-width:1100px;margin:0 auto;padding:28px}
  .banner{width:100%;height:360px;object-fit:cover;border-radius:12px;box-shadow:0 6px 20px rgba(0,0,0,0.12)}
  h1{font-size:32px;margin:18px 0 8px}
  .meta{color:var(--muted);font-weight:600}
  nav.topmenu{position:sticky;top:0;z-index:40;background:#fff;padding:10px 0;border-bottom:1px solid #eee}
  nav.topmenu .inner{max-width:1100px;margin:0 auto;display:flex;gap:12px;align-items:center;padding:0 18px}
  nav a{color:var(--black);text-decoration:none;font-weight:600}
  .grid{display:grid;grid-template-columns:2fr 1fr;gap:28px;margin-top:22px}
  .section{background:#fff;padding:18px;border-radius:12px;box-shadow:0 6px 20px rgba(0,0,0,0.03);margin-top:18px}
  .speaker{display:flex;gap:12px;align-items:center;margin-bottom:12px}
  .speaker img{width:64px;height:64px;border-radius:8px;object-fit:cover}
  .partners img{height:40px;margin-right:12px;object-fit:contain}
  .agenda .item{padding:10px;border-left:3px solid var(--yellow);margin-bottom:10px}
  .videos iframe{width:100%;height:300px;border:0;border-radius:8px}
  .contact a.btn{display:inline-block;margin-right:10px;background:var(--black);color:white;padding:10px 14px;border-radius:8px;text-decoration:none}
  footer{margin-top:40px;padding:20px;text-align:center;color:var(--muted)}
  @media(max-width:900px){ .grid{grid-template-columns:1fr} .banner{height:220px} }
"""

MODERN_CSS = """
  body{font-family:Inter,system-ui,Arial;background:#0f172a;color:#e6eef8;margin:0}
  .hero{min-height:320px;display:flex;align-items:center;justify-content:center;background-color:#111;background-position:center;background-size:cover}
  .hero h1{background:rgba(0,0,0,0.45);padding:16px;border-radius:8px}
  .container{padding:28px;max-width:1000px;margin:0 auto}
  .card{background:#071029;padding:18px;border-radius:12px;margin-bottom:18px}
  .muted{color:#9fb2c8}
  a.btn{display:inline-block;padding:8px 12px;background:#06b6d4;color:#001;border-radius:8px;text-decoration:none}
  .grid{display:grid;grid-template-columns:1fr 320px;gap:18px}
  .highlights{display:grid;grid-template-columns:repeat(auto-fit,minmax(200px,1fr));gap:12px}
  footer{padding:20px;text-align:center;color:#9fb2c8}
  @media(max-width:900px){ .grid{grid-template-columns:1fr} }
"""


def _whatsapp_link(number: str) -> str:
    return "https://wa.me/" + re.sub(r"\D", "", number)


def _classic_speaker(speaker: dict) -> str:
    name = escape_html(speaker["name"])
    photo = ""
    if speaker["photo"]:
        photo = f'<img src="{escape_html(speaker["photo"])}" alt="{name} photo"/>'
    return f"""
          <div class="speaker">
            {photo}
            <div>
              <div style="font-weight:700">{name}</div>
              <div style="color:var(--muted)">{escape_html(speaker["role"])}</div>
            </div>
          </div>"""


def render_classic(record: dict) -> str:
    page = _page_fields(record)
    title = escape_html(page["title"])
    when = " ".join(part for part in (page["date"], page["time"]) if part)

    banner = ""
    if page["banner"]:
        banner = f'<img class="banner" src="{escape_html(page["banner"])}" alt="{title} banner" />'

    if page["speakers"]:
        speakers = "".join(_classic_speaker(s) for s in page["speakers"])
    else:
        speakers = "<p>No speakers listed</p>"

    if page["agenda"]:
        agenda = "".join(
            f'<div class="item"><strong>{escape_html(a.get("title"))}</strong>'
            f'<div style="color:var(--muted)">{escape_html(a.get("time"))}</div></div>'
            for a in page["agenda"]
        )
    else:
        agenda = "<p>No agenda items</p>"

    if page["videos"]:
        videos = "".join(
            f'<div style="margin-bottom:12px"><iframe src="{escape_html(v)}" allowfullscreen></iframe></div>'
            for v in page["videos"]
        )
    else:
        videos = "<p>No videos</p>"

    if page["partners"]:
        partners = "".join(
            '<div style="display:flex;align-items:center;margin:8px 12px 8px 0">'
            + (f'<img src="{escape_html(p.get("logo"))}" alt="{escape_html(p.get("name"))}" />' if p.get("logo") else "")
            + f'<div style="margin-left:8px;color:var(--muted)">{escape_html(p.get("name"))}</div></div>'
            for p in page["partners"]
        )
    else:
        partners = "<p>No partners</p>"

    objectives = ""
    if page["objectives"]:
        objectives = "<ul>" + "".join(f"<li>{escape_html(o)}</li>" for o in page["objectives"]) + "</ul>"

    organizer = escape_html(page["organizer"])
    email = escape_html(page["email"])
    whatsapp = escape_html(page["whatsapp"])
    whatsapp_link = escape_html(_whatsapp_link(page["whatsapp"]))
    byline = f" &bull; Organized by {organizer}" if organizer else ""
    venue = f" &bull; {escape_html(page['venue'])}" if page["venue"] else ""

    return f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width,initial-scale=1" />
  <title>{title}</title>
  <style>{CLASSIC_CSS}</style>
</head>
<body>
  <nav class="topmenu"><div class="inner">
    <strong>{title}</strong>
    <div style="flex:1"></div>
    <a href="#about">About</a>
    <a href="#speakers">Speakers</a>
    <a href="#agenda">Agenda</a>
    <a href="#partners">Partners</a>
    <a href="#videos">Videos</a>
    <a href="#contact">Contact</a>
  </div></nav>

  <header class="hero">
    <div class="container">
      <h1>{title}</h1>
      <div class="meta">{escape_html(when)}{venue}{byline}</div>
      {banner}
    </div>
  </header>

  <main class="container">
    <div class="grid">
      <div>
        <section id="about" class="section">
          <h2>{escape_html(page["about_title"])}</h2>
          <p>{escape_html(page["description"])}</p>
          {objectives}
        </section>

        <section id="speakers" class="section speakers">
          <h2>Speakers</h2>
          {speakers}
        </section>

        <section id="agenda" class="section">
          <h2>Agenda</h2>
          <div class="agenda">{agenda}</div>
        </section>

        <section id="videos" class="section">
          <h2>Videos</h2>
          <div class="videos">{videos}</div>
        </section>
      </div>

      <aside>
        <section id="partners" class="section partners">
          <h3>Partners</h3>
          <div style="display:flex;flex-wrap:wrap;align-items:center">{partners}</div>
        </section>

        <section id="contact" class="section contact">
          <h3>Contact</h3>
          <p><strong>{organizer}</strong></p>
          <p>Email: <a href="mailto:{email}">{email}</a></p>
          <p>WhatsApp: <a href="{whatsapp_link}" target="_blank">{whatsapp}</a></p>
          <div style="margin-top:10px">
            <a class="btn" href="mailto:{email}">Email Organizer</a>
            <a class="btn" href="{whatsapp_link}" target="_blank">Message on WhatsApp</a>
          </div>
        </section>
      </aside>
    </div>

    <footer>
      Page generated dynamically. Event ID: {escape_html(page["event_id"])} &bull; Created: {escape_html(page["created"])}
    </footer>
  </main>
</body>
</html>
"""


def render_modern(record: dict) -> str:
    page = _page_fields(record)
    title = escape_html(page["title"])
    when = " ".join(part for part in (page["date"], page["time"], page["venue"]) if part)

    hero_style = ""
    if page["banner"]:
        hero_style = f' style="background-image:url(&quot;{escape_html(page["banner"])}&quot;)"'

    highlights = ""
    if page["highlights"]:
        highlights = (
            '<div class="card"><h2>Highlights</h2><div class="highlights">'
            + "".join(
                f'<div><strong>{escape_html(h.get("title"))}</strong>'
                f'<div class="muted">{escape_html(h.get("description"))}</div></div>'
                for h in page["highlights"]
            )
            + "</div></div>"
        )

    agenda = "".join(
        f'<div><strong>{escape_html(a.get("title"))}</strong> &ndash; {escape_html(a.get("time"))}</div>'
        for a in page["agenda"]
    ) or '<p class="muted">No agenda items</p>'

    speakers = "".join(
        f'<div style="margin-bottom:10px"><strong>{escape_html(s["name"])}</strong>'
        f'<div class="muted">{escape_html(s["role"])}</div></div>'
        for s in page["speakers"]
    ) or '<p class="muted">No speakers listed</p>'

    partners = "".join(
        (f'<div><img src="{escape_html(p.get("logo"))}" style="height:40px" alt="{escape_html(p.get("name"))}"/></div>'
         if p.get("logo") else f'<div>{escape_html(p.get("name"))}</div>')
        for p in page["partners"]
    ) or '<p class="muted">No partners</p>'

    return f"""<!doctype html>
<html lang="en"><head><meta charset="utf-8"><meta name="viewport" content="width=device-width,initial-scale=1">
<title>{title}</title>
<style>{MODERN_CSS}</style>
</head><body>
  <div class="hero"{hero_style}><h1>{title}</h1></div>
  <div class="container">
    <p class="muted">{escape_html(when)}</p>
    <div class="grid">
      <div>
        <div class="card"><h2>{escape_html(page["about_title"])}</h2><p>{escape_html(page["description"])}</p></div>
        {highlights}
        <div class="card"><h2>Agenda</h2>{agenda}</div>
        <div class="card"><h2>Speakers</h2>{speakers}</div>
      </div>
      <aside>
        <div class="card"><h3>Contact</h3><div>{escape_html(page["organizer"])}</div><div><a class="btn" href="mailto:{escape_html(page["email"])}">Email</a></div></div>
        <div class="card"><h3>Partners</h3>{partners}</div>
      </aside>
    </div>
    <footer>Event ID: {escape_html(page["event_id"])} &bull; Created: {escape_html(page["created"])}</footer>
  </div>
</body></html>
"""


TEMPLATES = {
    "1": render_classic,
    "2": render_modern,
}


def render_event_page(record: dict) -> str:
    """Render a stored record with the template it selected"""
    return TEMPLATES[select_template(record)](record)
