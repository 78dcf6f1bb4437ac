from __future__ import annotations

from typing import Sequence

from pydantic import BaseModel

PROMPT_TEMPLATE = """
You are AsGuJu Pro, an Indonesian legal assistant for courtroom support.
Combine the case description and the uploaded file contents below, analyze relevant criminal law issues (KUHP, KUHAP) and provide:
- Facts & Evidence (concise)
- Relevant Articles (cite KUHP/KUHAP; if possible reference official sources)
- Legal Arguments (step-by-step: facts -> legal elements -> application)
- Conclusion & recommended charges / evidence to strengthen
Produce output in Markdown, concise (max ~700 words). Be explicit about uncertainty (use wording like "indikasi" or "kemungkinan").
Case description:
{case_description}

File contents (top parts):
{files_summary}
"""


class ExtractedFile(BaseModel):
    filename: str
    text: str


def build_prompt(
    case_description: str,
    files: Sequence[ExtractedFile],
    *,
    file_chars: int = 4000,
) -> str:
    files_summary = "\n".join(
        f"---\nFile: {item.filename}\n{item.text[:file_chars]}\n" for item in files
    )
    return PROMPT_TEMPLATE.format(
        case_description=case_description,
        files_summary=files_summary,
    )
