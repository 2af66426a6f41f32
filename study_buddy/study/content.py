"""Static study content shown next to the chat."""

from study_buddy.auth.dependencies import CurrentUser, require_user

STUDY_TIPS = [
    {
        "title": "Active Reading Strategy",
        "description": "Use the SQ3R method: Survey, Question, Read, Recite, Review",
        "category": "Reading",
    },
    {
        "title": "Essay Structure",
        "description": "Follow the classic 5-paragraph structure: Introduction, 3 body paragraphs, conclusion",
        "category": "Writing",
    },
    {
        "title": "Time Management",
        "description": "Use the Pomodoro Technique: 25 minutes focused work, 5-minute break",
        "category": "Study Skills",
    },
    {
        "title": "Critical Thinking",
        "description": "Always ask: What? So what? Now what? to analyze any topic deeply",
        "category": "Analysis",
    },
]

ACADEMIC_RESOURCES = [
    {
        "title": "Citation Guides",
        "resources": [
            "MLA Style Guide - For literature and humanities",
            "APA Style Guide - For psychology and social sciences",
            "Chicago Manual of Style - For history and fine arts",
        ],
    },
    {
        "title": "Research Databases",
        "resources": [
            "JSTOR - Academic articles and books",
            "Project MUSE - Humanities and social sciences",
            "Google Scholar - Free academic search engine",
        ],
    },
    {
        "title": "Writing Centers",
        "resources": [
            "Purdue OWL - Comprehensive writing resources",
            "University Writing Centers - Local tutoring support",
            "Grammarly - Grammar and style checking",
        ],
    },
]

QUICK_PROMPTS = [
    {"text": "Explain a concept", "prompt": "Can you help me understand the concept of"},
    {"text": "Essay writing help", "prompt": "I need help writing an essay about"},
    {"text": "Study strategies", "prompt": "What are some effective study strategies for"},
    {"text": "Exam preparation", "prompt": "How should I prepare for my exam on"},
]

SAMPLE_QUESTIONS = [
    "How do I write a strong thesis statement?",
    "What's the difference between primary and secondary sources?",
    "Can you explain the concept of social constructivism?",
    "How do I analyze a poem for literary devices?",
    "What are the key elements of a persuasive argument?",
    "How do I manage my time effectively during finals?",
]


def get_study_tips(user: CurrentUser | None, subject: str | None = None) -> list[dict]:
    require_user(user)
    if subject:
        matching = [tip for tip in STUDY_TIPS if tip["category"].lower() == subject.strip().lower()]
        if matching:
            return [dict(tip) for tip in matching]
    return [dict(tip) for tip in STUDY_TIPS]


def get_academic_resources(user: CurrentUser | None) -> list[dict]:
    require_user(user)
    return [{"title": group["title"], "resources": list(group["resources"])} for group in ACADEMIC_RESOURCES]


def get_starter_prompts(user: CurrentUser | None) -> dict:
    require_user(user)
    return {
        "quick_prompts": [dict(p) for p in QUICK_PROMPTS],
        "sample_questions": list(SAMPLE_QUESTIONS),
    }
