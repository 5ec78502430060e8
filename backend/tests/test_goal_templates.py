from __future__ import annotations

from goalcraft.api.schemas.goal_spec import Milestone
from goalcraft.services.goal_templates import clamp_milestone_weeks
from goalcraft.services.spec_compiler import compile_rule_based


def _weeks(spec) -> list[int]:
    return [milestone.week for milestone in spec.milestones]


def test_half_marathon_example() -> None:
    spec = compile_rule_based("I want to run a half marathon in 3 months")

    assert spec.category == "fitness"
    assert spec.title == "Half Marathon Training"
    assert (spec.duration_days, spec.duration_display) == (90, "3 months")
    assert spec.target == "13.1 miles"
    assert spec.tracker("Longest Run").target == 13.1
    assert spec.tracker("Training Days").target == 54
    assert spec.tracker("Weekly Miles").target == 10.48
    assert _weeks(spec) == [2, 6, 10, 11]
    assert spec.milestones[1].target == "5 mile long run"
    assert spec.gamification.xp_rate == 10
    assert spec.source == "rules"


def test_short_fitness_goal_uses_three_milestones() -> None:
    spec = compile_rule_based("get fit with cardio in 8 weeks")

    assert spec.title == "Fitness Goal"
    assert spec.target == "5 miles"
    assert [m.title for m in spec.milestones] == ["Foundation", "Build Up", "Final Push"]
    assert _weeks(spec) == [2, 4, 7]


def test_specific_goal_template() -> None:
    spec = compile_rule_based("master sourdough in 10 weeks")

    assert spec.title == "Master Sourdough Baking"
    assert spec.category == "creative"
    assert _weeks(spec) == [2, 5, 8, 9]
    assert spec.milestones[-1].target == "Perfect loaf"
    assert spec.tracker("Starter Days").target == 56
    assert spec.gamification.xp_rate == 15
    assert spec.gamification.badges == ["First Attempt", "Getting Better", "Master Level"]


def test_learning_extracts_language() -> None:
    spec = compile_rule_based("learn french in 6 months")

    assert spec.title == "Learn French"
    assert spec.target == "Conversational French"
    assert spec.duration_days == 180
    assert spec.tracker("Study Hours").target == 90


def test_writing_novel_targets() -> None:
    spec = compile_rule_based("write a novel this year in 12 months")

    assert spec.title == "Write a Novel"
    assert spec.target == "80,000 words"
    assert spec.milestones[0].target == "20,000 words"
    assert spec.tracker("Daily Word Count").target == 80000 // 360


def test_short_duration_milestones_are_clamped() -> None:
    spec = compile_rule_based("write a novel in 2 weeks")

    assert _weeks(spec) == [1, 2, 3, 4]


def test_general_goal_truncates_long_titles() -> None:
    text = "z" * 130
    spec = compile_rule_based(text)

    assert spec.category == "general"
    assert spec.title == "z" * 117 + "..."
    assert spec.tracker("Progress").type == "percentage"


def test_clamp_keeps_increasing_weeks_untouched() -> None:
    milestones = [
        Milestone(week=0, title="a", description="", target=""),
        Milestone(week=0, title="b", description="", target=""),
        Milestone(week=7, title="c", description="", target=""),
    ]

    assert [m.week for m in clamp_milestone_weeks(milestones)] == [1, 2, 7]
