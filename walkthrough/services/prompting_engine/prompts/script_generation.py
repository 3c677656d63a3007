"""
Narration script prompt.

Used by: pipeline/script_generation/generator.py
"""

from .base import PromptTemplate


SCRIPT_GENERATION = PromptTemplate(
    template="""# Script Generation

You are writing the voiceover for a product walkthrough video.

Analysis of the recording:
{analysis}

Video duration: {duration} seconds
Target audience: {audience}
Tone: {tone}
Style: {style}

Write narration segments that follow the on-screen action.
Rules:
- Each segment has startTime and endTime in seconds, within 0 and {duration}
- Segments are ordered by startTime
- Keep each line short enough to speak comfortably in its time window
- List words the narrator should stress in "emphasis"
- You may use [PAUSE] or [EMPHASIS: word] directions inside the text

Respond with ONLY a JSON array in a ```json block:
```json
[
  {"startTime": 0, "endTime": 3, "text": "Narration line", "emphasis": ["word"]}
]
```""",
    description="Write timed narration segments from a workflow analysis"
)
