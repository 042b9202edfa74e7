"""Stage change email templates."""
from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Dict

from ..domain.paper import Paper, Stage


@dataclass(frozen=True)
class StageEmail:
    subject: str
    html: str


_TEMPLATES: Dict[Stage, Dict[str, str]] = {
    Stage.SUBMIT: {
        "subject": "Paper Submitted for Review",
        "html": """
<h2>Paper Submission Notification</h2>
<p>Hello,</p>
<p>The paper "<strong>{title}</strong>" (ID: {paper_id}) has been submitted for review.</p>
<p>Domain: {domain}</p>
<p>Thank you for your participation.</p>
""",
    },
    Stage.REVIEWING: {
        "subject": "Paper Under Review",
        "html": """
<h2>Paper Review Notification</h2>
<p>Hello,</p>
<p>The paper "<strong>{title}</strong>" (ID: {paper_id}) is now under review.</p>
<p>Domain: {domain}</p>
<p>You will be notified when the review is complete.</p>
""",
    },
    Stage.ACCEPTED: {
        "subject": "Paper Accepted",
        "html": """
<h2>Paper Acceptance Notification</h2>
<p>Hello,</p>
<p>We are pleased to inform you that the paper "<strong>{title}</strong>" (ID: {paper_id}) has been accepted.</p>
<p>Domain: {domain}</p>
<p>Congratulations!</p>
""",
    },
    Stage.PUBLISHED: {
        "subject": "Paper Published",
        "html": """
<h2>Paper Publication Notification</h2>
<p>Hello,</p>
<p>The paper "<strong>{title}</strong>" (ID: {paper_id}) has been published.</p>
<p>Domain: {domain}</p>
<p>Thank you for your contribution.</p>
""",
    },
}


_FOOTER = """<p><small>Current stage: {stage}</small></p>
"""


def render_stage_email(paper: Paper, stage: Stage | str) -> StageEmail:
    try:
        key = Stage(stage)
    except ValueError:
        key = Stage.SUBMIT
    tpl = _TEMPLATES.get(key, _TEMPLATES[Stage.SUBMIT])
    body = (tpl["html"] + _FOOTER).format(
        title=html.escape(paper.title),
        paper_id=html.escape(paper.paper_id),
        domain=html.escape(paper.domain or ""),
        stage=key.value,
    )
    return StageEmail(subject=tpl["subject"], html=body.strip())
