from __future__ import annotations

from .intervals import TimelineEvent

DEMO_EVENTS = [
    TimelineEvent(
        start="2015-09",
        end="2019-06",
        label="Computer Science Degree",
        category="Education",
        description="Bachelor of Science in Computer Science.",
    ),
    TimelineEvent(
        start="07/2019",
        end="02/2021",
        label="Junior Frontend Developer",
        category="Work",
        description="Responsive web applications in React and TypeScript.",
    ),
    TimelineEvent(
        start="03/2020",
        end="05/2021",
        label="Open Source Contributor",
        category="Project",
    ),
    TimelineEvent(
        start="03/2021",
        end=None,
        label="Senior Software Engineer",
        category="Work",
        description="Leading the frontend team.",
    ),
    TimelineEvent(
        start="08/2022",
        end="08/2022",
        label="Tech Blog Launch",
        category="Milestone",
    ),
    TimelineEvent(
        start="2023",
        end="2023",
        label="Conference Talks",
        category="Milestone",
    ),
]
