"""Prompt templates sent to the generative service."""

from __future__ import annotations

ISEF_CATEGORIES = (
    "Animal Sciences (AS), Behavioral and Social Sciences (BE), Biochemistry (BI), "
    "Biomedical and Health Sciences (BM), Biomedical Engineering (EN), Cellular and Molecular Biology (CB), "
    "Chemistry (CH), Computational Biology and Bioinformatics (CO), Earth and Environmental Sciences (EA), "
    "Embedded Systems (EB), Energy: Sustainable Materials and Design (EG), "
    "Engineering Technology: Statics and Dynamics (ET), Environmental Engineering (EE), Materials Science (MS), "
    "Mathematics (MA), Microbiology (MI), Physics and Astronomy (PA), Plant Sciences (PS), "
    "Robotics and Intelligent Machines (RO), Systems Software (SS), Translational Medical Science (TM)"
)

BRAINSTORM_TEMPLATE = """\
You are an expert science fair strategist helping a student brainstorm a project about "{topic}".

Your main tasks are:
1.  **State of the Field Analysis:** Use Google Search to give a brief but insightful analysis of the current state of the field for "{topic}": major trends, open challenges and exciting areas of research. Keep it a high-level overview that orients the student.

2.  **Suggest Subtopics:** Based on your analysis and the topic ("{topic}"), list 3-5 relevant subtopics.

3.  **Generate Project Ideas:** Propose 5-7 distinct project ideas. They should be novel, useful and aligned with an official ISEF category. If an idea is inspired by or closely related to a past ISEF Grand Award-winning project found via Google Search, you MUST say so explicitly in the description.

**Official ISEF Categories:** {categories}.

For each project idea, provide:
a. A clear title.
b. The most relevant ISEF Category.
c. A one-paragraph description focusing on novelty and real-world impact. Hyperlink key technical terms, concepts or required skills in markdown to explanatory pages (Wikipedia, tutorials, documentation). Mention any inspiration from past ISEF winners here.
d. A "Feasibility & Limitations" analysis in a markdown table.
e. A ranking on a scale of 1-10 for the criteria below in a markdown table.
f. A list of 2-3 "Key Resources" (seminal papers or core documentation) as a markdown list of links.

Your response MUST follow this exact markdown structure, with "---" on its own line as a separator between each major section:

### State of the Field Analysis
*(Your analysis of the current research landscape for the topic.)*

---

### Subtopics
- Subtopic 1
- Subtopic 2

---

### Project Idea 1
**Title:** [Project 1 Title]
**ISEF Category:** [ISEF Category Name (CODE)]
**Description:** [One paragraph with markdown links]
**Feasibility & Limitations:**
| Aspect | Analysis |
| :--- | :--- |
| Data Availability | [Analysis] |
| Technical Complexity | [Analysis] |
| Time Commitment | [Analysis] |
**Rankings:**
| Criteria | Score (1-10) |
| :--- | :--- |
| Impact | [Score] |
| Scientific Rigor | [Score] |
| Novelty | [Score] |
| Wow Factor | [Score] |
**Key Resources:**
- [Resource title](https://example.org)
- [Resource title](https://example.org)

---

### Project Idea 2
... and so on for all 5-7 projects.

Use Google Search extensively so your suggestions and analysis are up to date and well grounded.
"""

TIMELINE_TEMPLATE = """\
Create a detailed, step-by-step project timeline for a science fair project titled "{title}".
Project description: {description}
Break the timeline into logical phases (such as 'Research', 'Data Collection', 'Development', 'Analysis', 'Final Presentation').
For each phase, list the key tasks and give an estimated duration.
"""

ADVISOR_INSTRUCTION = """\
You are a helpful science fair project advisor. You are answering questions about the following project.
Project Title: "{title}"
Project Description: "{description}"
Keep your answers concise and helpful for a student. Be encouraging and supportive.
"""

GREETING_TEMPLATE = (
    "Hello! I'm here to help you with your project, **\"{title}\"**. "
    "I've generated a potential timeline for you. What's your first question?"
)


def brainstorm_prompt(topic: str) -> str:
    return BRAINSTORM_TEMPLATE.format(topic=topic, categories=ISEF_CATEGORIES)


def timeline_prompt(title: str, description: str) -> str:
    return TIMELINE_TEMPLATE.format(title=title, description=description)


def advisor_instruction(title: str, description: str) -> str:
    return ADVISOR_INSTRUCTION.format(title=title, description=description)


def greeting(title: str) -> str:
    return GREETING_TEMPLATE.format(title=title)
