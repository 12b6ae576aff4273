"""
Planner prompts.

Prompt builders for top goal generation, schedule generation and activity
categorization.
"""

from __future__ import annotations

from timebox.models.generation import (
    CategorizeActivityRequest,
    GenerateScheduleRequest,
    GenerateTopGoalsRequest,
)

PLANNER_SYSTEM_PROMPT = """You are a daily planning assistant that applies timeboxing.
Follow the user prompt exactly and return only the requested JSON.
DO NOT return markdown."""

TOP_GOALS_SCHEMA = {
    "type": "object",
    "properties": {"topGoals": {"type": "array", "items": {"type": "string"}}},
    "required": ["topGoals"],
}

SCHEDULE_SCHEMA = {
    "type": "object",
    "properties": {
        "schedule": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "id": {"type": "string"},
                    "startTime": {"type": "number"},
                    "duration": {"type": "number"},
                    "activity": {"type": "string"},
                    "activityType": {
                        "type": "string",
                        "enum": ["top-goal", "leisure", "physical", "default"],
                    },
                },
                "required": ["id", "startTime", "duration", "activity", "activityType"],
            },
        }
    },
    "required": ["schedule"],
}

CATEGORY_SCHEMA = {
    "type": "object",
    "properties": {
        "category": {
            "type": "string",
            "enum": ["top-goal", "leisure", "physical", "default"],
        }
    },
    "required": ["category"],
}


def _profile_context(profile: str | None, hobbies: str | None) -> str:
    context = ""
    if profile:
        context += f'\nUser profile: "{profile}"'
    if hobbies:
        context += f'\nUser hobbies and interests: "{hobbies}"'
    return context


def build_top_goals_prompt(request: GenerateTopGoalsRequest) -> str:
    return f"""Based on the user's north star: "{request.north_star}" and brain dump: "{request.brain_dump}",{_profile_context(request.profile, request.hobbies)}
generate 3 focused daily goals.
Return JSON: {{"topGoals": ["...", "...", "..."]}}"""


def build_schedule_prompt(request: GenerateScheduleRequest) -> str:
    window = request.day_duration
    context = _profile_context(request.profile, request.hobbies)
    if request.intermittent_fasting:
        context += (
            "\nUser practices intermittent fasting, so avoid scheduling meal times too close "
            "together and consider a later breakfast/earlier dinner window."
        )
    if request.working_duration:
        context += f"\nUser prefers focused work blocks of about {request.working_duration} minutes."
    if request.date:
        context += f"\nThe schedule is for {request.date}."

    core_rule = ""
    if request.core_time:
        core_rule = (
            "\n6. Schedule the most important/challenging tasks during the user's Core Time "
            f"({request.core_time.start} to {request.core_time.end}), which is when they are "
            "most active and productive"
        )

    return f"""Based on the user's north star: "{request.north_star}",
brain dump: "{request.brain_dump}",
and top goals: "{", ".join(request.top_goals)}",{context}
generate a realistic daily schedule applying timeboxing principles:

1. Create dedicated 1-hour minimum time blocks for each of the top goals, with clear start and end times
2. Include 1-hour rest/break blocks between intense focus sessions
3. Allocate at least one 1-hour block for physical activity/movement
4. Include at least one 1-2 hour leisure/entertainment block
5. Consider grouping similar tasks into larger time blocks when appropriate (1+ hours each){core_rule}
7. ONLY schedule activities between the user's preferred hours of {window.start} and {window.end}

IMPORTANT: Each activity block MUST be a minimum of 30 minutes in duration.
IMPORTANT: Only create schedule items that fall within {window.start} to {window.end}.
IMPORTANT: Activity blocks must not overlap.
The startTime is an hour of the day from 0 to 23, in whole or half hours (e.g. 9 or 9.5).
The duration is in hours, in whole or half hours.
Give every item a unique id such as "item-1".
activityType is one of "top-goal", "leisure", "physical", "default".
Make the schedule realistic by not overloading the day with too many tasks."""


def build_categorize_prompt(request: CategorizeActivityRequest) -> str:
    goals = ", ".join(goal for goal in request.top_goals if goal.strip())
    return f"""Categorize the following activity: "{request.activity}"

Top goals provided by the user: {goals}

Categorize this activity into one of these types:
1. "top-goal" - If it directly relates to one of the user's top goals
2. "leisure" - If it's for relaxation, entertainment, breaks, or hobbies
3. "physical" - If it involves exercise, physical activity, or movement
4. "default" - If it doesn't fit clearly into the above categories

Return JSON: {{"category": "<type>"}}"""
