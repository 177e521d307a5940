#!/usr/bin/env python3
"""Thirty Plants TUI — weekly plant checklist powered by Textual."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.reactive import reactive
from textual.widgets import (
    Checkbox,
    DataTable,
    Footer,
    Header,
    Input,
    Label,
    Static,
)

from tracker import TrackerSession, parse_week_key, shift_week, workspace_root


# ── Stylesheet ─────────────────────────────────────────────────

CSS = """
Screen {
    background: $surface;
}

#main-layout {
    height: 1fr;
}

#checklist {
    width: 2fr;
    min-width: 30;
    border-right: tall $primary-background-darken-2;
    padding: 0 1;
}

#side-pane {
    width: 1fr;
    min-width: 26;
    padding: 0 1;
}

.section-title {
    text-style: bold;
    color: $text;
    margin: 1 0 0 0;
    padding: 0 1;
}

.plant-row {
    height: auto;
}

.plant-row Checkbox {
    width: 1fr;
    height: auto;
    padding: 0 1 0 0;
}

.eaten {
    color: $success;
}

#week-info {
    height: auto;
    padding: 1 2;
    border: tall $primary-background-darken-2;
}

#import-input {
    dock: bottom;
    display: none;
}

.overlay-screen {
    padding: 1 2;
}

#stats-info {
    height: auto;
    padding: 1 2;
    margin: 0 0 1 0;
    border: tall $primary-background-darken-2;
}

#grid-table, #weeks-table {
    height: 1fr;
}
"""


# ── Screens ────────────────────────────────────────────────────


class StatsScreen(Vertical):
    """Aggregate stats + recorded weeks table."""

    def __init__(self, session: TrackerSession, **kwargs) -> None:
        super().__init__(**kwargs)
        self.session = session

    def compose(self) -> ComposeResult:
        yield Label("Stats", classes="section-title")
        yield Static(id="stats-info")
        yield DataTable(id="weeks-table")

    def on_mount(self) -> None:
        stats = self.session.stats()
        streak = self.session.streak()
        self.query_one("#stats-info", Static).update(
            "\n".join([
                f"Current streak: {streak.current_streak} weeks (best {streak.longest_streak})",
                f"Weeks at goal: {stats.weeks_achieved} / {stats.total_weeks}",
                f"Success rate: {stats.success_rate_percent}%",
                f"Unique plants eaten: {stats.unique_plants_consumed}",
            ])
        )

        table: DataTable = self.query_one("#weeks-table", DataTable)
        table.add_columns("Week", "Plants", "Goal")
        for key in reversed(self.session.tracking.weeks()):
            progress = self.session.progress(key)
            table.add_row(key, str(progress.count), "yes" if progress.achieved else "")


class GridScreen(Vertical):
    """13 x 4 year grid for the selected week's year."""

    def __init__(self, session: TrackerSession, year: int, **kwargs) -> None:
        super().__init__(**kwargs)
        self.session = session
        self.year = year

    def compose(self) -> ComposeResult:
        yield Label(f"Year {self.year}", classes="section-title")
        yield DataTable(id="grid-table")

    def on_mount(self) -> None:
        table: DataTable = self.query_one("#grid-table", DataTable)
        table.add_columns("", "", "", "")
        for row in self.session.grid(self.year):
            cells = []
            for cell in row:
                mark = "*" if cell.achieved else " "
                here = ">" if cell.is_current else " "
                cells.append(f"{here}{cell.week_key[-3:]} {cell.count:>3}{mark}")
            table.add_row(*cells)


# ── Main app ───────────────────────────────────────────────────


class PlantsApp(App):
    """Thirty Plants — tick off every plant you eat this week."""

    TITLE = "Thirty Plants"
    CSS = CSS
    AUTO_FOCUS = None

    BINDINGS = [
        Binding("p", "prev_week", "Prev week"),
        Binding("n", "next_week", "Next week"),
        Binding("c", "current_week", "This week"),
        Binding("d", "show_dashboard", "Checklist"),
        Binding("s", "show_stats", "Stats"),
        Binding("y", "show_grid", "Year"),
        Binding("i", "import_plants", "Import"),
        Binding("escape", "cancel_import", "Back"),
        Binding("q", "quit", "Quit"),
    ]

    current_view: reactive[str] = reactive("dashboard")

    def __init__(self, session: TrackerSession) -> None:
        super().__init__()
        self.session = session
        self.week_key = session.current_week_key()
        self._names: dict[str, str] = {}
        self._generation = 0

    def compose(self) -> ComposeResult:
        yield Header()
        yield Horizontal(
            VerticalScroll(id="checklist", can_focus=False),
            Vertical(
                Label("This week", classes="section-title"),
                Static(id="week-info"),
                Label("By category", classes="section-title"),
                Static(id="breakdown"),
                id="side-pane",
            ),
            id="main-layout",
        )
        yield Input(placeholder="path to CSV file…", id="import-input")
        yield Footer()

    def on_mount(self) -> None:
        self._load_week()

    def _load_week(self) -> None:
        """(Re)build the checklist and side panel for the selected week."""
        view = self.session.week_view(self.week_key)
        checklist = self.query_one("#checklist", VerticalScroll)
        checklist.remove_children()
        self._names = {}
        self._generation += 1

        index = 0
        groups = dict(view["catalog"])
        if view["notInCatalog"]:
            groups["No longer in catalog"] = [{"name": n, "eaten": True} for n in view["notInCatalog"]]
        for category, plants in groups.items():
            checklist.mount(Label(category, classes="section-title"))
            for plant in plants:
                cb_id = f"plant-{self._generation}-{index}"
                index += 1
                self._names[cb_id] = plant["name"]
                cb = Checkbox(plant["name"], value=plant["eaten"], id=cb_id)
                if plant["eaten"]:
                    cb.add_class("eaten")
                checklist.mount(Horizontal(cb, classes="plant-row"))

        self._update_info()

    def _update_info(self) -> None:
        progress = self.session.progress(self.week_key)
        streak = self.session.streak()
        suffix = " (this week)" if self.week_key == self.session.current_week_key() else ""
        status = "Goal reached!" if progress.achieved else f"{progress.remaining} to go"
        self.query_one("#week-info", Static).update(
            f"{self.week_key}{suffix}\n{progress.count} / {progress.goal} plants ({progress.percent}%)\n{status}"
        )
        breakdown = self.session.breakdown(self.week_key)
        self.query_one("#breakdown", Static).update(
            "\n".join(f"{cat}: {n}" for cat, n in breakdown.items()) or "(nothing yet)"
        )
        self.sub_title = f"{self.week_key} · {progress.count}/{progress.goal} · streak {streak.current_streak}"

    @on(Checkbox.Changed)
    def _on_checkbox_toggle(self, event: Checkbox.Changed) -> None:
        cb_id = event.checkbox.id or ""
        name = self._names.get(cb_id)
        if name is None:
            return
        plants = self.session.toggle(self.week_key, name)
        eaten = name in plants
        event.checkbox.set_class(eaten, "eaten")
        if event.checkbox.value != eaten:
            with event.checkbox.prevent(Checkbox.Changed):
                event.checkbox.value = eaten
        self._update_info()

    @on(Input.Submitted, "#import-input")
    def _on_import_submitted(self, event: Input.Submitted) -> None:
        path = Path(event.value.strip()).expanduser()
        event.input.value = ""
        event.input.display = False
        if not path.is_file():
            self.notify(f"File not found: {path}", title="Import", severity="error")
            return
        try:
            text = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            self.notify(f"Could not read {path}: {e}", title="Import", severity="error")
            return
        result = self.session.import_text(text)
        self.notify(f"Imported {result.imported}, skipped {result.skipped}", title="Import")
        self._switch_to("dashboard")
        self._load_week()

    # ── Actions ────────────────────────────────────────────────

    def _go_to(self, week_key: str) -> None:
        self.week_key = week_key
        self._switch_to("dashboard")
        self._load_week()

    def action_prev_week(self) -> None:
        self._go_to(shift_week(self.week_key, -1))

    def action_next_week(self) -> None:
        self._go_to(shift_week(self.week_key, 1))

    def action_current_week(self) -> None:
        self._go_to(self.session.current_week_key())

    def action_show_dashboard(self) -> None:
        self._switch_to("dashboard")

    def action_show_stats(self) -> None:
        self._switch_to("stats")

    def action_show_grid(self) -> None:
        self._switch_to("grid")

    def action_import_plants(self) -> None:
        box = self.query_one("#import-input", Input)
        box.display = True
        box.focus()

    def action_cancel_import(self) -> None:
        box = self.query_one("#import-input", Input)
        box.display = False
        self.set_focus(None)

    def _switch_to(self, view: str) -> None:
        main = self.query_one("#main-layout", Horizontal)

        for old in self.query(".overlay-screen"):
            old.remove()

        dashboard = view == "dashboard"
        self.query_one("#checklist").display = dashboard
        self.query_one("#side-pane").display = dashboard

        if view == "stats":
            main.mount(StatsScreen(self.session, classes="overlay-screen"))
        elif view == "grid":
            year, _ = parse_week_key(self.week_key)
            main.mount(GridScreen(self.session, year, classes="overlay-screen"))

        self.current_view = view


# ── Entry point ────────────────────────────────────────────────


def main() -> None:
    root = workspace_root()
    if not root.exists():
        print(f"Workspace not found: {root}")
        print("Create it or set PLANTS_ROOT.")
        sys.exit(1)

    logging.basicConfig(
        filename=str(root / "tracker.log"),
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    session = TrackerSession.open(root)
    if session.recovered:
        print("Stored data was unreadable; starting from the default catalog.")

    app = PlantsApp(session)
    app.run()


if __name__ == "__main__":
    main()
