from __future__ import annotations

import os
import secrets
from pathlib import Path
from typing import Any

from tracker import (
    DuplicateError,
    TrackerError,
    TrackerSession,
    is_week_key,
    parse_week_key,
    shift_week,
)

ASSET_V = "20250301-01"
from fastapi import FastAPI, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from fastapi import Body
from fastapi.security import HTTPBasic, HTTPBasicCredentials


# ── HTML helpers ──────────────────────────────────────────────

def _escape(s: str) -> str:
    return (
        s.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def _render_checklist(view: dict[str, Any]) -> str:
    sections = []
    for category, plants in view["catalog"].items():
        rows = "".join(
            f'<label class="plant{" eaten" if p["eaten"] else ""}">'
            f'<input type="checkbox" data-plant="{_escape(p["name"])}" {"checked" if p["eaten"] else ""} /> '
            f'{_escape(p["name"])}</label>'
            for p in plants
        )
        sections.append(
            f'<details open><summary><b>{_escape(category)}</b> '
            f'<span class="muted small">({sum(1 for p in plants if p["eaten"])}/{len(plants)})</span></summary>'
            f'<div class="plants">{rows}</div></details>'
        )
    if view["notInCatalog"]:
        rows = "".join(
            f'<label class="plant eaten"><input type="checkbox" data-plant="{_escape(n)}" checked /> {_escape(n)}</label>'
            for n in view["notInCatalog"]
        )
        sections.append(
            f'<details open><summary><b>No longer in catalog</b></summary><div class="plants">{rows}</div></details>'
        )
    return "".join(sections)


def _render_grid(session: TrackerSession, year: int, selected: str) -> str:
    rows = []
    for row in session.grid(year):
        cells = []
        for cell in row:
            classes = ["cell"]
            if cell.achieved:
                classes.append("achieved")
            elif cell.count:
                classes.append("partial")
            if cell.is_current:
                classes.append("current")
            if cell.week_key == selected:
                classes.append("selected")
            cells.append(
                f'<a class="{" ".join(classes)}" href="/?week={cell.week_key}" '
                f'title="{cell.week_key}: {cell.count}">{cell.week_key[-3:]}<br/><b>{cell.count}</b></a>'
            )
        rows.append(f'<div class="grid-row">{"".join(cells)}</div>')
    return "".join(rows)


# ── App & auth ────────────────────────────────────────────────

app = FastAPI(title="Thirty Plants", version="0.1.0")

static_dir = Path(__file__).parent / "static"
app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

security = HTTPBasic(auto_error=False)


def get_current_user(credentials: HTTPBasicCredentials | None = Depends(security)) -> str:
    expected_username = os.environ.get("PLANTS_USERNAME", "")
    expected_password = os.environ.get("PLANTS_PASSWORD", "")

    if not expected_username or not expected_password:
        return "guest"

    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Basic"},
        )

    correct_username = secrets.compare_digest(credentials.username.encode("utf-8"), expected_username.encode("utf-8"))
    correct_password = secrets.compare_digest(credentials.password.encode("utf-8"), expected_password.encode("utf-8"))

    if not (correct_username and correct_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    return credentials.username


def get_session() -> TrackerSession:
    return TrackerSession.open()


def _week_or_400(week_key: str) -> str:
    try:
        parse_week_key(week_key)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return week_key


# ── Pages ─────────────────────────────────────────────────────

@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"ok": "true"}


@app.get("/", response_class=HTMLResponse)
def index(
    week: str | None = None,
    session: TrackerSession = Depends(get_session),
    username: str = Depends(get_current_user),
) -> HTMLResponse:
    current = session.current_week_key()
    week_key = week if week and is_week_key(week) else current
    year, _ = parse_week_key(week_key)

    view = session.week_view(week_key)
    progress = view["progress"]
    stats = session.stats()
    streak = session.streak()

    html = f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>Thirty Plants</title>
  <link rel="stylesheet" href="/static/style.css?v={ASSET_V}" />
</head>
<body data-week="{week_key}">
  <div class="container">
    <header class="top">
      <div>
        <h1>Thirty Plants</h1>
        <div class="muted small">\U0001f525 <b>{streak.current_streak}</b> week streak · best {streak.longest_streak}</div>
      </div>
      <nav class="weeknav">
        <a href="/?week={shift_week(week_key, -1)}">&larr;</a>
        <span class="pill">{week_key}{" (this week)" if view["isCurrent"] else ""}</span>
        <a href="/?week={shift_week(week_key, 1)}">&rarr;</a>
        <a href="/" class="muted small">today</a>
      </nav>
    </header>

    <section class="card">
      <h2><span id="count">{progress["count"]}</span> / {progress["goal"]} plants</h2>
      <div class="bar"><div class="fill" style="width:{progress["percent"]}%"></div></div>
      <div class="muted small">{"Goal reached!" if progress["achieved"] else f'{progress["remaining"]} to go'}</div>
    </section>

    <section class="grid">
      <div class="card">
        <h2>Plants this week</h2>
        {_render_checklist(view)}
      </div>

      <div class="card">
        <h2>Stats</h2>
        <div class="kv">
          <div class="kv-row"><div class="kv-key">Weeks at goal</div><div class="kv-val">{stats.weeks_achieved} / {stats.total_weeks}</div></div>
          <div class="kv-row"><div class="kv-key">Success rate</div><div class="kv-val">{stats.success_rate_percent}%</div></div>
          <div class="kv-row"><div class="kv-key">Unique plants eaten</div><div class="kv-val">{stats.unique_plants_consumed}</div></div>
        </div>
        <h3 style="margin-top:12px">{year}</h3>
        <div class="year-grid">{_render_grid(session, year, week_key)}</div>
      </div>
    </section>

    <section class="card">
      <details>
        <summary><b>Catalog</b> <span class="muted small">({len(session.catalog)} plants)</span></summary>
        <form id="addPlant">
          <input name="name" placeholder="plant name" />
          <input name="category" placeholder="category (optional)" />
          <button type="submit">Add</button>
        </form>
        <div style="margin-top:8px">
          <input type="file" id="importFile" accept=".csv,.txt" />
          <a href="/api/plants/export">Export CSV</a>
          <button id="resetCatalog">Reset to defaults</button>
        </div>
        <div id="catalogStatus" class="muted small"></div>
      </details>
    </section>
    <footer class="muted small">Goal: {session.goal} different plants every week.</footer>
  </div>

  <script src="/static/app.js?v={ASSET_V}"></script>
</body>
</html>"""
    return HTMLResponse(html)


# ── Weeks ─────────────────────────────────────────────────────

@app.get("/api/weeks/current")
def api_current_week(session: TrackerSession = Depends(get_session), username: str = Depends(get_current_user)) -> dict[str, Any]:
    return session.week_view(session.current_week_key())


@app.get("/api/weeks/{week_key}")
def api_get_week(week_key: str, session: TrackerSession = Depends(get_session), username: str = Depends(get_current_user)) -> dict[str, Any]:
    return session.week_view(_week_or_400(week_key))


@app.post("/api/weeks/{week_key}/toggle")
def api_toggle(
    week_key: str,
    payload: dict[str, Any] = Body(...),
    session: TrackerSession = Depends(get_session),
    username: str = Depends(get_current_user),
) -> dict[str, Any]:
    """Toggle one plant in a week."""
    _week_or_400(week_key)
    name = str(payload.get("name", ""))
    if not name.strip():
        raise HTTPException(status_code=400, detail="Missing plant name")
    plants = session.toggle(week_key, name)
    return {
        "ok": True,
        "weekKey": week_key,
        "eaten": name in plants,
        "plants": sorted(plants, key=str.casefold),
        "progress": session.progress(week_key).to_dict(),
    }


# ── Stats ─────────────────────────────────────────────────────

@app.get("/api/stats")
def api_stats(session: TrackerSession = Depends(get_session), username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Aggregate stats plus streaks."""
    return {
        **session.stats().to_dict(),
        **session.streak().to_dict(),
        "goal": session.goal,
        "currentWeek": session.current_week_key(),
    }


@app.get("/api/year/{year}")
def api_year(year: int, session: TrackerSession = Depends(get_session), username: str = Depends(get_current_user)) -> dict[str, Any]:
    if year < 1 or year > 9998:
        raise HTTPException(status_code=400, detail=f"Invalid year: {year}")
    return {
        "year": year,
        "rows": [[cell.to_dict() for cell in row] for row in session.grid(year)],
    }


# ── Catalog ───────────────────────────────────────────────────

@app.get("/api/plants")
def api_list_plants(q: str = "", session: TrackerSession = Depends(get_session), username: str = Depends(get_current_user)) -> dict[str, Any]:
    plants = session.catalog.search(q)
    return {"count": len(plants), "plants": [p.to_dict() for p in plants]}


@app.post("/api/plants")
def api_add_plant(payload: dict[str, Any] = Body(...), session: TrackerSession = Depends(get_session), username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Add a plant to the catalog."""
    try:
        plant = session.add_plant(str(payload.get("name", "")), payload.get("category"))
    except TrackerError as e:
        code = 409 if isinstance(e, DuplicateError) else 400
        raise HTTPException(status_code=code, detail=str(e))
    return {"ok": True, "plant": plant.to_dict()}


@app.delete("/api/plants/{name}")
def api_delete_plant(name: str, session: TrackerSession = Depends(get_session), username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Remove a plant from the catalog; weekly history keeps it."""
    if not session.remove_plant(name):
        raise HTTPException(status_code=404, detail=f"Plant not found: {name}")
    return {"ok": True, "name": name}


@app.post("/api/plants/import")
async def api_import_plants(request: Request, session: TrackerSession = Depends(get_session), username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Merge a CSV-like plant list sent as the raw request body."""
    raw = await request.body()
    text = raw.decode("utf-8-sig", errors="replace")
    result = session.import_text(text)
    return {"ok": True, **result.to_dict()}


@app.get("/api/plants/export")
def api_export_plants(session: TrackerSession = Depends(get_session), username: str = Depends(get_current_user)) -> PlainTextResponse:
    return PlainTextResponse(
        session.export_catalog(),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="plants.csv"'},
    )


@app.post("/api/plants/reset")
def api_reset_plants(session: TrackerSession = Depends(get_session), username: str = Depends(get_current_user)) -> dict[str, Any]:
    session.reset_catalog()
    return {"ok": True, "count": len(session.catalog)}
