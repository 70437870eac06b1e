#system + user prompts sent to Groq for a single diagram request
from __future__ import annotations
import textwrap
from dataclasses import dataclass
from typing import Optional
from topic_classifier import get_example
SYSTEM_PROMPT = textwrap.dedent("""\
You are an expert diagram creator specializing in topic-specific flowcharts.

ABSOLUTE RULES:
1. Create diagrams ONLY about the exact topic provided
2. NEVER mix different subject areas
3. NEVER add machine learning, AI, or data science concepts unless the topic specifically asks for them
4. NEVER add supervised learning, regression, clustering, classification to non-ML topics
5. Every single node must be directly related to the specific topic
6. Use practical, real-world steps and processes

OUTPUT FORMAT:
- Start with ```mermaid
- Use graph TD; format
- End with ```
- Use descriptive labels in [square brackets]
- Connect with --> arrows

TOPIC FOCUS: Create content that someone learning about this specific topic would find useful and relevant.""")
# checked independently of categorize(), so a topic can get a technology
# example and a marketing focus line at the same time
FOCUS_HINTS = (
    (("cooking", "recipe", "food"),
     "For cooking topics, focus on: ingredients, preparation steps, cooking methods, timing, serving."),
    (("marketing", "advertising"),
     "For marketing topics, focus on: strategy, research, audience, channels, measurement."),
    (("business", "process"),
     "For business topics, focus on: planning, operations, management, workflow, outcomes."),
)
@dataclass(frozen=True)
class PromptPair:
    system: str
    user: str
def focus_hint(topic: str) -> str:
    topic_lower = (topic or "").lower()
    for keywords, hint in FOCUS_HINTS:
        if any(k in topic_lower for k in keywords):
            return hint
    return ""
def build_user_prompt(topic: str, category: Optional[str]) -> str:
    prompt = textwrap.dedent(f"""\
Create a Mermaid flowchart diagram for: "{topic}"

SPECIFIC INSTRUCTIONS FOR "{topic}":
- Focus EXCLUSIVELY on "{topic}" concepts and processes
- Create a logical flow of steps, concepts, or components related to "{topic}"
- Include 6-12 nodes that show the main aspects of "{topic}"
- Make it educational and practical for someone learning about "{topic}"
- Do NOT include any unrelated concepts from other fields

""")
    example = get_example(category)
    if example:
        prompt += (
            "Here's the style of diagram structure to follow "
            "(copy the style only, not the content):\n"
            f"{example}\n\n"
            f'Now create a similar structure but for "{topic}":'
        )
    else:
        prompt += f'Create the diagram for "{topic}":'
    hint = focus_hint(topic)
    if hint:
        prompt += f"\n\n{hint}"
    return prompt
def build_prompts(topic: str, category: Optional[str]) -> PromptPair:
    return PromptPair(system=SYSTEM_PROMPT, user=build_user_prompt(topic, category))
