"""Prompt templates for keyword strategies and GIF selection."""

from reactiongif.models.strategy import Perspective

STRATEGY_SYSTEM_PROMPT = "You are a reaction GIF expert who turns situations into GIF searches."

KEYWORDS_PROMPT = """You are a reaction GIF expert. Analyze the following text and determine the perfect reaction GIF to respond with.

Text to analyze: "{text}"

Instructions:
1. Extract 1-3 REACTION keywords (emotions, gestures, expressions like "facepalm", "mind blown", "celebration", "cringe", "awkward")
2. Optionally extract a TOPIC keyword that contextualizes the reaction - but ONLY if:
   - The topic is specific and searchable (e.g. "coding", "coffee", "cat", "monday")
   - Including it would likely find a more relevant GIF
   - The topic is commonly used in GIF searches
   - Set to null if the reaction keywords alone are sufficient or if the topic is too generic/abstract

Examples:
- "when my code finally compiles" → keywords: ["relief", "celebration"], topic: "coding"
- "that feeling when you see your crush" → keywords: ["nervous", "excited"], topic: null (too generic)
- "me waiting for my coffee to brew" → keywords: ["waiting", "impatient"], topic: "coffee"
- "when someone says they don't like pizza" → keywords: ["shocked", "disgusted"], topic: null (reaction is enough)"""

PERSPECTIVE_GUIDANCE: dict[Perspective, str] = {
    Perspective.EMOTIONAL: (
        "Focus on how the person FEELS: the raw emotion or mood behind the message "
        "(joy, dread, relief, heartbreak)."
    ),
    Perspective.LITERAL: (
        "Focus on what is actually HAPPENING: the concrete action, object or scene "
        "described, shown as directly as possible."
    ),
    Perspective.SARCASTIC: (
        "Focus on the IRONIC take: an exaggerated, deadpan or mock-enthusiastic "
        "reaction that pokes fun at the situation."
    ),
}

PERSPECTIVES_PROMPT = """You are a reaction GIF expert. Analyze the following text and plan three different reaction GIF searches, one for each perspective.

Text to analyze: "{text}"

Perspectives:
{guidance}

For EACH perspective:
1. Extract 1-3 REACTION keywords (emotions, gestures, expressions) that fit that perspective
2. Optionally add a TOPIC keyword only if it is specific, commonly searched and would find a more relevant GIF; otherwise null
3. Explain briefly why the keywords fit

The three strategies must produce clearly different search queries. Do not reuse the same keyword set across perspectives.

Example for "when my code finally compiles":
- emotional → keywords: ["relief", "joy"], topic: null
- literal → keywords: ["typing", "computer"], topic: "coding"
- sarcastic → keywords: ["slow clap", "wow"], topic: null"""

SELECTION_PROMPT = """You are selecting the perfect reaction GIF for someone's message.

Original message: "{text}"
{guidance}
Here are the available GIFs:
{options}

Select the GIF that:
1. Best matches the emotional tone and context of the original message
2. Would be the funniest or most relatable reaction
3. Has clear, expressive content (use the alt text to understand what the GIF shows)

Return the index of the best GIF."""


def format_perspective_guidance() -> str:
    """Bullet list describing every perspective."""
    return "\n".join(
        f"- {perspective.value}: {text}" for perspective, text in PERSPECTIVE_GUIDANCE.items()
    )
