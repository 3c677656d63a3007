"""
Overlay suggestion prompt.

Used by: pipeline/assembly/overlays.py
"""

from .base import PromptTemplate


VIDEO_EDITING = PromptTemplate(
    template="""# Video Editing

You are editing a product walkthrough video and adding on-screen text.

Recorded workflow:
{workflow}

Narration:
{script}

Suggest short text overlays (a few words each) that reinforce the narration.
Rules:
- startTime and endTime are seconds; endTime is greater than startTime
- position x and y are percentages of the frame, between 0 and 100
- Avoid covering the element the user is interacting with

Respond with ONLY a JSON array in a ```json block:
```json
[
  {
    "text": "Overlay text",
    "startTime": 0,
    "endTime": 3,
    "position": {"x": 50, "y": 20},
    "style": {"fontSize": 32, "color": "#FFFFFF", "backgroundColor": "#00000080", "fontFamily": "Arial"}
  }
]
```""",
    description="Suggest timed text overlays for a narrated workflow"
)
