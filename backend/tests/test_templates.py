import pytest

from paper_tracker.domain.paper import Paper, Stage
from paper_tracker.notifications.templates import render_stage_email


@pytest.fixture
def paper() -> Paper:
    return Paper(id="u1", paper_id="PAPER001", title="Advanced Neural Networks", domain="AI")


@pytest.mark.parametrize(
    "stage,subject",
    [
        ("submit", "Paper Submitted for Review"),
        ("reviewing", "Paper Under Review"),
        ("accepted", "Paper Accepted"),
        ("published", "Paper Published"),
    ],
)
def test_subject_per_stage(paper: Paper, stage: str, subject: str) -> None:
    email = render_stage_email(paper, stage)
    assert email.subject == subject
    assert "<strong>Advanced Neural Networks</strong>" in email.html
    assert "PAPER001" in email.html
    assert "Domain: AI" in email.html
    assert f"Current stage: {stage}" in email.html


def test_bodies_differ_between_stages(paper: Paper) -> None:
    bodies = {render_stage_email(paper, s).html for s in (Stage.SUBMIT, Stage.REVIEWING, Stage.ACCEPTED, Stage.PUBLISHED)}
    assert len(bodies) == 4


def test_unknown_stage_falls_back_to_submit_template(paper: Paper) -> None:
    assert render_stage_email(paper, "archived").subject == "Paper Submitted for Review"


def test_values_are_html_escaped() -> None:
    paper = Paper(id="u1", paper_id="P<1>", title='<script>alert("x")</script>', domain="A&B")
    html = render_stage_email(paper, "submit").html
    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "P&lt;1&gt;" in html
    assert "A&amp;B" in html
