from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CareerEntry:
    title: str
    category: str
    description: str = ""
    required_skills: tuple[str, ...] = ()
    salary_range: str = ""
    job_outlook: str = ""
    work_environment: tuple[str, ...] = ()
    match_factors: tuple[str, ...] = ()


CAREER_CATALOG: tuple[CareerEntry, ...] = (
    CareerEntry(
        title="Data Scientist",
        category="Technology",
        description=(
            "Analyze complex data to help organizations make informed decisions "
            "using statistical methods and machine learning."
        ),
        required_skills=("Python", "Statistics", "Machine Learning", "SQL", "Data Visualization"),
        salary_range="$80,000 - $150,000",
        job_outlook="Much faster than average (22% growth)",
        work_environment=("Remote friendly", "Collaborative", "Analytical"),
        match_factors=("Logical-Mathematical", "Intrapersonal"),
    ),
    CareerEntry(
        title="Software Engineer",
        category="Technology",
        description=(
            "Design, develop, and maintain software applications and systems "
            "using various programming languages."
        ),
        required_skills=("Programming", "Problem Solving", "Algorithms", "Team Collaboration"),
        salary_range="$90,000 - $160,000",
        job_outlook="Much faster than average (25% growth)",
        work_environment=("Team-based", "Innovative", "Technical"),
        match_factors=("Logical-Mathematical", "Intrapersonal"),
    ),
    CareerEntry(
        title="UX/UI Designer",
        category="Creative",
        description="Create intuitive and visually appealing user interfaces for digital products and services.",
        required_skills=("Design Thinking", "Prototyping", "User Research", "Adobe Creative Suite"),
        salary_range="$65,000 - $120,000",
        job_outlook="Faster than average (13% growth)",
        work_environment=("Creative", "User-focused", "Collaborative"),
        match_factors=("Visual-Spatial", "Interpersonal"),
    ),
    CareerEntry(
        title="Content Writer",
        category="Creative",
        description=(
            "Create engaging written content for various media platforms including "
            "websites, blogs, and marketing materials."
        ),
        required_skills=("Writing", "Research", "SEO", "Content Strategy"),
        salary_range="$40,000 - $80,000",
        job_outlook="Faster than average (9% growth)",
        work_environment=("Independent", "Creative", "Deadline-driven"),
        match_factors=("Linguistic", "Intrapersonal"),
    ),
    CareerEntry(
        title="Teacher",
        category="Education",
        description=(
            "Educate and inspire students in various subjects while fostering their "
            "intellectual and personal development."
        ),
        required_skills=("Communication", "Curriculum Development", "Classroom Management", "Patience"),
        salary_range="$40,000 - $70,000",
        job_outlook="As fast as average (8% growth)",
        work_environment=("Social", "Structured", "Nurturing"),
        match_factors=("Linguistic", "Interpersonal"),
    ),
    CareerEntry(
        title="Environmental Scientist",
        category="Science",
        description=(
            "Study the environment and find solutions to environmental problems "
            "affecting human health and ecosystems."
        ),
        required_skills=("Research", "Data Analysis", "Environmental Monitoring", "Report Writing"),
        salary_range="$55,000 - $95,000",
        job_outlook="Faster than average (8% growth)",
        work_environment=("Fieldwork", "Laboratory", "Policy-oriented"),
        match_factors=("Naturalistic", "Logical-Mathematical"),
    ),
)


def get_career(title: str) -> CareerEntry | None:
    for entry in CAREER_CATALOG:
        if entry.title == title:
            return entry
    return None
