"""
Printable one-page employee summary.
Standalone HTML with embedded styles; all record text is escaped.
"""
from html import escape
from typing import Iterable

from ops_personnel.services.metrics import leave_totals

REPORT_CSS = """
body { font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
       background: #f8fafc; color: #1e293b; margin: 0; padding: 32px; }
.header { background: #4338ca; color: #fff; border-radius: 24px; padding: 32px;
          display: flex; justify-content: space-between; align-items: center; margin-bottom: 32px; }
.avatar { width: 96px; height: 96px; border-radius: 20px; object-fit: cover; margin-right: 24px;
          background: rgba(255,255,255,0.15); display: flex; align-items: center; justify-content: center;
          font-size: 40px; font-weight: 800; }
.identity { display: flex; align-items: center; }
.identity h1 { margin: 0; font-size: 32px; }
.muted { opacity: 0.7; font-size: 12px; text-transform: uppercase; letter-spacing: 0.1em; }
.score { text-align: center; background: rgba(255,255,255,0.1); border-radius: 20px; padding: 20px; }
.score strong { font-size: 44px; display: block; }
h2 { font-size: 12px; color: #94a3b8; text-transform: uppercase; letter-spacing: 0.3em; margin: 32px 0 16px; }
.grid { display: grid; grid-template-columns: repeat(2, 1fr); gap: 16px; }
.card { background: #fff; border: 1px solid #e2e8f0; border-radius: 20px; padding: 20px; break-inside: avoid; }
.card.note { background: #0f172a; color: #fff; }
.card.observation { border-left: 8px solid #fbbf24; }
.badge { font-size: 10px; font-weight: 800; text-transform: uppercase; padding: 4px 10px; border-radius: 999px;
         background: #eef2ff; color: #4f46e5; }
.badge.Exceeds { background: #ecfdf5; color: #059669; }
.badge.Below { background: #fef2f2; color: #dc2626; }
.plan { background: #fffbeb; color: #92400e; border-radius: 12px; padding: 8px; font-size: 11px; margin-top: 8px; }
.empty { color: #94a3b8; font-style: italic; }
.print { position: fixed; bottom: 32px; right: 32px; padding: 14px 32px; border: 0; border-radius: 16px;
         background: #4f46e5; color: #fff; font-weight: 800; cursor: pointer; }
@media print {
  .no-print { display: none; }
  body { padding: 0; -webkit-print-color-adjust: exact; }
}
"""


def _section(title: str, cards: list, empty_text: str) -> str:
    body = "".join(cards) if cards else f'<p class="empty">{escape(empty_text)}</p>'
    return f"<h2>{escape(title)}</h2><div class=\"grid\">{body}</div>"


def _avatar(employee) -> str:
    if employee.profile_picture:
        return f'<img class="avatar" src="{escape(employee.profile_picture, quote=True)}" alt="" />'
    return f'<div class="avatar">{escape(employee.name[:1].upper())}</div>'


def render_employee_report(employee, evaluations: Iterable, leaves: Iterable, notes: Iterable, observations: Iterable) -> str:
    evaluations = sorted(evaluations, key=lambda ev: (ev.year, ev.date), reverse=True)
    leaves = sorted(leaves, key=lambda lv: lv.date, reverse=True)
    notes = sorted(notes, key=lambda n: n.date, reverse=True)
    observations = sorted(observations, key=lambda o: o.date, reverse=True)

    evaluation_cards = [
        f'<div class="card"><strong>{ev.year}</strong> '
        f'<span class="badge {escape(ev.rating, quote=True)}">{escape(ev.rating)}</span> '
        f'<span>{ev.score}%</span>'
        f'<p><em>{escape(ev.summary or "")}</em></p>'
        f'<p class="muted">Review date: {ev.date.isoformat()}</p></div>'
        for ev in evaluations
    ]
    leave_cards = [
        f'<div class="card"><strong>{lv.date.isoformat()}</strong>'
        f'<p class="muted">{escape(lv.type)} &middot; {lv.duration:g} days</p>'
        + (f"<p>{escape(lv.comment)}</p>" if lv.comment else "")
        + "</div>"
        for lv in leaves
    ]
    totals = leave_totals(leaves)
    totals_line = ", ".join(f"{escape(kind)}: {days:g}" for kind, days in sorted(totals.items()))
    note_cards = [
        f'<div class="card note"><strong>{escape(n.title)}</strong> '
        f'<span class="muted">{n.date.isoformat()}</span>'
        f"<p>{escape(n.text)}</p>"
        f'<p class="muted">Author: {escape(n.author_name)}</p></div>'
        for n in notes
    ]
    observation_cards = [
        f'<div class="card observation"><span class="muted">{o.date.isoformat()}</span> '
        f'<span class="badge">{escape(o.status)}</span>'
        f"<p>{escape(o.description)}</p>"
        + (f'<div class="plan">Plan: {escape(o.action_plan)}</div>' if o.action_plan else "")
        + "</div>"
        for o in observations
    ]

    hire_date = employee.hire_date.isoformat() if employee.hire_date else "n/a"
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8"/>
    <title>Executive Summary - {escape(employee.name)}</title>
    <style>{REPORT_CSS}</style>
</head>
<body>
    <div class="header">
        <div class="identity">
            {_avatar(employee)}
            <div>
                <h1>{escape(employee.name)}</h1>
                <p class="muted">{escape(employee.job_title or employee.role)}</p>
                <p class="muted">Division: {escape(employee.department)} &middot; Member since {hire_date}</p>
            </div>
        </div>
        <div class="score"><span class="muted">Performance index</span><strong>{employee.effective_score}%</strong></div>
    </div>
    {_section("Latest Evaluations", evaluation_cards, "No evaluations recorded.")}
    {_section("Attendance Registry", leave_cards, "No leave recorded.")}
    <p class="muted">Totals: {totals_line or "none"}</p>
    {_section("Work Issues", note_cards, "No work issues recorded.")}
    {_section("Behaviour Issues", observation_cards, "No behaviour issues recorded.")}
    <button class="print no-print" onclick="window.print()">Print Executive Summary</button>
</body>
</html>
"""
