"""
Prompt construction for SEO generation.

Renders the reference channel profiles and the target video into a single
instruction. The closing JSON contract is what parse_optimized_response()
expects back, so the two must stay in sync.
"""

from typing import Dict, List

# Per-channel samples rendered into the prompt
PROMPT_TITLE_SAMPLES = 8
PROMPT_DESCRIPTION_SAMPLES = 5
PROMPT_TAG_SAMPLES = 15

CHANNEL_DELIMITER = '\n---\n'

OUTPUT_CONTRACT = """{
  "title": "optimized title here",
  "description": "optimized description here with hashtags",
  "tags": ["tag1", "tag2", "tag3"]
}"""


def _bullets(items: List[str]) -> str:
    return '\n'.join(f"- {item}" for item in items)


def format_channel_section(index: int, profile: Dict) -> str:
    """Render one channel profile. `index` is 1-based."""
    patterns = profile.get('patterns', {})
    titles = patterns.get('titlePatterns', [])[:PROMPT_TITLE_SAMPLES]
    descriptions = patterns.get('descriptionPatterns', [])[:PROMPT_DESCRIPTION_SAMPLES]
    tags = patterns.get('commonTags', [])[:PROMPT_TAG_SAMPLES]

    return f"""
Channel {index}: {profile.get('channelName', '')}

Sample Titles:
{_bullets(titles)}

Sample Descriptions:
{_bullets(descriptions)}

Common Tags/Hashtags:
{', '.join(tags)}
"""


def build_optimization_prompt(profiles: List[Dict], target: Dict) -> str:
    """
    Build the generation prompt.

    Args:
        profiles: Channel profiles from aggregate_channels()
        target: Target video info (title, description, tags)

    Returns:
        Prompt text. Same inputs always give the same prompt.
    """
    channel_sections = CHANNEL_DELIMITER.join(
        format_channel_section(i + 1, profile) for i, profile in enumerate(profiles)
    )

    return f"""You are a YouTube SEO expert. Analyze these successful channels and generate optimized SEO for a target video.

REFERENCE CHANNELS ANALYSIS:

{channel_sections}

TARGET VIDEO TO OPTIMIZE:
Original Title: {target.get('title', '')}
Original Description: {target.get('description', '')}
Original Tags: {', '.join(target.get('tags', []))}

TASK:
Based on the patterns from the successful channels above, generate:
1. An optimized title (should follow similar style and structure as the reference channels)
2. An optimized description (should follow similar format and include relevant hashtags)
3. Optimized tags/hashtags (mix of popular ones from reference channels and relevant ones for this video)

Return your response in this EXACT JSON format:
{OUTPUT_CONTRACT}"""
