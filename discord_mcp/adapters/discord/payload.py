"""Build discord.py call arguments from validated tool requests.

Only supplied values are forwarded; absent optional fields are omitted
rather than sent as empty placeholders.
"""

from typing import Any, Dict, List

import discord

from discord_mcp.ports.inbound import (
    AllowedMentionsInput,
    EmbedInput,
    ReadMessagesRequest,
    SendMessageRequest,
)


def build_embed(params: EmbedInput) -> discord.Embed:
    embed = discord.Embed(
        title=params.title or None,
        description=params.description or None,
        url=params.url or None,
        color=params.color,
        timestamp=params.timestamp,
    )
    for field in params.fields:
        embed.add_field(name=field.name, value=field.value, inline=field.inline)
    if params.author:
        embed.set_author(
            name=params.author.name,
            url=params.author.url or None,
            icon_url=params.author.icon_url or None,
        )
    if params.thumbnail:
        embed.set_thumbnail(url=params.thumbnail.url)
    if params.image:
        embed.set_image(url=params.image.url)
    if params.footer:
        embed.set_footer(text=params.footer.text, icon_url=params.footer.icon_url or None)
    return embed


def _snowflakes(ids: List[str]) -> List[discord.Object]:
    return [discord.Object(id=int(i)) for i in ids]


def build_allowed_mentions(mentions: AllowedMentionsInput) -> discord.AllowedMentions:
    """Translate the API-style {parse, users, roles, repliedUser} shape."""
    return discord.AllowedMentions(
        everyone="everyone" in mentions.parse,
        users=True if "users" in mentions.parse else _snowflakes(mentions.users),
        roles=True if "roles" in mentions.parse else _snowflakes(mentions.roles),
        replied_user=mentions.replied_user,
    )


def build_send_kwargs(request: SendMessageRequest) -> Dict[str, Any]:
    """Keyword arguments for ``Messageable.send``.

    ``suppress_embeds`` and ``silent`` are folded by discord.py into the
    SUPPRESS_EMBEDS / SUPPRESS_NOTIFICATIONS message flag bitmask.
    """
    kwargs: Dict[str, Any] = {}
    if request.content:
        kwargs["content"] = request.content
    if request.embeds:
        kwargs["embeds"] = [build_embed(e) for e in request.embeds]
    if request.tts:
        kwargs["tts"] = True
    if request.reply_to:
        # A stale reference must not fail the send
        kwargs["reference"] = discord.MessageReference(
            message_id=int(request.reply_to),
            channel_id=int(request.channel_id),
            fail_if_not_exists=False,
        )
    if request.allowed_mentions is not None:
        kwargs["allowed_mentions"] = build_allowed_mentions(request.allowed_mentions)
    if request.suppress_embeds:
        kwargs["suppress_embeds"] = True
    if request.suppress_notifications:
        kwargs["silent"] = True
    return kwargs


def build_history_kwargs(request: ReadMessagesRequest) -> Dict[str, Any]:
    """Keyword arguments for ``Messageable.history``; anchors pass through as given."""
    kwargs: Dict[str, Any] = {"limit": request.limit}
    for anchor in ("before", "after", "around"):
        value = getattr(request, anchor)
        if value is not None:
            kwargs[anchor] = discord.Object(id=int(value))
    return kwargs
