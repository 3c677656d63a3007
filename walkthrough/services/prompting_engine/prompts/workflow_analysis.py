"""
Workflow analysis prompt.

Used by: pipeline/script_generation/generator.py
"""

from .base import PromptTemplate


WORKFLOW_ANALYSIS = PromptTemplate(
    template="""# Workflow Analysis

You are a product marketing analyst watching a recorded product demo.

Recorded session:
- URL: {url}
- Duration: {duration} seconds
- Number of interactions: {stepCount}
- Interaction sequence: {actions}

Identify:
1. The product features the user touches
2. The user journey, as timestamped moments
3. The moments worth highlighting in a marketing video
4. The UI elements that appear
5. The value propositions the session demonstrates

Respond with ONLY a JSON object in a ```json block:
```json
{
  "features": ["feature"],
  "journey": [{"timestamp": 0, "description": "what happens"}],
  "highlights": [{"timestamp": 0, "description": "why it matters"}],
  "uiElements": ["element"],
  "valueProps": ["benefit"]
}
```""",
    description="Extract features, journey and highlights from a recorded workflow"
)
