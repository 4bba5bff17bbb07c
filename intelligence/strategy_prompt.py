"""Master prompt assembly: collected titles + client parameters -> one instruction document."""

from __future__ import annotations

from typing import Iterable, Sequence, Tuple

from models import CollectedData, StrategyRequest, TitleRecord


NO_DATA_PLACEHOLDER = "N/A"
TITLE_SEPARATOR = ", "
GROUP_SEPARATOR = " | "

STRATEGY_SECTIONS = (
    "trendDiscovery",
    "contentAnalysis",
    "competitorReport",
    "strategyCalendar",
)
CALENDAR_DAYS = 30

STRATEGY_PROMPT_TEMPLATE = """
You are a world-class content strategist and data analyst. I have gathered real-time data from YouTube and Reddit for a client. Your task is to generate a complete content strategy based on this data and your own expert knowledge.

Client Details:
- Target Audience: {audience}
- Primary Goal: {goal}

Live Data Collected:
- Top YouTube Videos: {top_videos}
- Competitor YouTube Videos: {competitor_videos}
- Top Reddit Posts: {community_posts}

Based on all of this, provide a response in a single JSON object with the following four keys: {section_keys}.

1.  "trendDiscovery": An object containing trend analysis from four key platforms.
    - "youtubeTrends": Analyze the provided YouTube data to identify 3-5 key trends.
    - "redditTrends": Analyze the provided Reddit data to identify 3-5 key community topics and sentiments.
    - "simulatedXTrends": Act as an expert on X (Twitter). Based on your knowledge, simulate the top 3-5 trending topics and content formats (e.g., threads, memes) relevant to the target audience on X right now.
    - "simulatedGoogleTrends": Act as an expert search analyst. Based on your knowledge, simulate the top 3-5 rising search queries on Google Trends relevant to the target audience.

2.  "contentAnalysis": An object that deconstructs what makes high-performing content successful.
    - "winningFormats": Identify the most effective content formats (e.g., YouTube Shorts, long-form video) based on all available data.
    - "toneOfVoice": Describe the most successful tone of voice (e.g., 'humorous and informal', 'educational and authoritative').
    - "engagementTriggers": List common engagement triggers found in the content (e.g., 'asking a direct question', 'hosting a challenge').
    - "optimalTiming": Suggest the best days and times to post, providing a rationale.

3.  "competitorReport": An object analyzing the specified competitors.
    - "youtubeCompetitorAnalysis": Analyze the provided competitor YouTube video titles. Summarize their content strategy, topic focus, and posting frequency.
    - "inferredXStrategy": Based on their known strategy, infer what their strategy on X would likely be.

4.  "strategyCalendar": An array of {calendar_days} objects, representing a full {calendar_days}-day content plan. Each object in the array must have the following structure: {{ "day": number, "platform": "YouTube/Instagram/Reddit", "title": "A catchy, fully-formed content title", "format": "e.g., YouTube Short, IG Reel, Reddit Thread", "description": "A 1-2 sentence description of the content piece." }}
"""


def render_titles(records: Sequence[TitleRecord]) -> str:
    """Comma-join titles; empty -> placeholder so 'none found' never reads as blank."""
    if not records:
        return NO_DATA_PLACEHOLDER
    return TITLE_SEPARATOR.join(record.title for record in records)


def render_groups(groups: Iterable[Tuple[str, Sequence[TitleRecord]]]) -> str:
    """Render `name: titles` groups joined by GROUP_SEPARATOR."""
    rendered = [f"{name}: {render_titles(records)}" for name, records in groups]
    if not rendered:
        return NO_DATA_PLACEHOLDER
    return GROUP_SEPARATOR.join(rendered)


def assemble_prompt(request: StrategyRequest, collected: CollectedData) -> str:
    """Build the master prompt. Pure and deterministic."""
    competitor_videos = render_groups(
        (result.channel, result.videos) for result in collected.competitor_results
    )
    community_posts = render_groups(
        (f"r/{result.community}", result.posts) for result in collected.community_results
    )

    return STRATEGY_PROMPT_TEMPLATE.format(
        audience=request.audience,
        goal=request.goal,
        top_videos=render_titles(collected.top_titles),
        competitor_videos=competitor_videos,
        community_posts=community_posts,
        section_keys=", ".join(f'"{key}"' for key in STRATEGY_SECTIONS),
        calendar_days=CALENDAR_DAYS,
    )
