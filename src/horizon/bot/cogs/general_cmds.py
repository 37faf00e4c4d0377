"""
General cog: utility commands open to every member.

- /mergepdf: merge PDF files attached to the command and/or to linked
  messages into a single document, in the given order.
"""

import asyncio
import io
from typing import List, Optional

import discord
from discord import Option
from discord.ext import commands

from horizon.util.discord_utils import resolve_message_link
from horizon.util.logger import get_logger
from horizon.util.pdf_utils import is_pdf, merge_pdfs, sanitize_pdf_name

logger = get_logger("general_cog")

NO_PDF_GIVEN = "Give me PDF files to merge, as attachments or as links to messages containing them."
NOT_ENOUGH_FILES = "I need at least two PDF files to merge."
MERGE_ERROR = "Something went wrong while merging your files. Are they all valid PDFs?"

ATTACHMENT_DESCRIPTION = "A PDF file to merge"


class GeneralCog(commands.Cog):
    """Commands available to everyone, in servers and in DMs."""

    def __init__(self, discord_bot_instance):
        self.discord_bot_instance = discord_bot_instance
        logger.info("General cog loaded")

    async def collect_files(
        self,
        message_links: Optional[str],
        attachments: List[Optional[discord.Attachment]],
    ) -> Optional[List[discord.Attachment]]:
        """
        Gather the files to merge: command attachments first, then the PDF
        attachments of the linked messages.

        Returns None when no file was given at all.
        """
        links = message_links.split() if message_links else []
        resolved = await asyncio.gather(
            *(resolve_message_link(self.discord_bot_instance, link) for link in links)
        )
        linked_messages = [message for message in resolved if message is not None]
        given = [attachment for attachment in attachments if attachment is not None]

        if not given and all(not message.attachments for message in linked_messages):
            return None

        linked_files = [
            file
            for message in linked_messages
            for file in message.attachments
            if is_pdf(file.content_type, file.filename)
        ]
        return given + linked_files

    @commands.slash_command(name="mergepdf", description="Merge PDF files into a single document.")
    async def mergepdf(
        self,
        application_context: discord.ApplicationContext,
        messages: Option(str, "Links to messages with PDF attachments, separated by spaces", required=False, default=None),  # type: ignore[valid-type]
        attachment1: Option(discord.Attachment, ATTACHMENT_DESCRIPTION, required=False, default=None),  # type: ignore[valid-type]
        attachment2: Option(discord.Attachment, ATTACHMENT_DESCRIPTION, required=False, default=None),  # type: ignore[valid-type]
        attachment3: Option(discord.Attachment, ATTACHMENT_DESCRIPTION, required=False, default=None),  # type: ignore[valid-type]
        attachment4: Option(discord.Attachment, ATTACHMENT_DESCRIPTION, required=False, default=None),  # type: ignore[valid-type]
        attachment5: Option(discord.Attachment, ATTACHMENT_DESCRIPTION, required=False, default=None),  # type: ignore[valid-type]
        attachment6: Option(discord.Attachment, ATTACHMENT_DESCRIPTION, required=False, default=None),  # type: ignore[valid-type]
        attachment7: Option(discord.Attachment, ATTACHMENT_DESCRIPTION, required=False, default=None),  # type: ignore[valid-type]
        attachment8: Option(discord.Attachment, ATTACHMENT_DESCRIPTION, required=False, default=None),  # type: ignore[valid-type]
        attachment9: Option(discord.Attachment, ATTACHMENT_DESCRIPTION, required=False, default=None),  # type: ignore[valid-type]
        attachment10: Option(discord.Attachment, ATTACHMENT_DESCRIPTION, required=False, default=None),  # type: ignore[valid-type]
        name: Option(str, "Name of the merged file", required=False, default=None),  # type: ignore[valid-type]
    ):
        await application_context.defer()

        files = await self.collect_files(
            messages,
            [
                attachment1, attachment2, attachment3, attachment4, attachment5,
                attachment6, attachment7, attachment8, attachment9, attachment10,
            ],
        )
        if files is None:
            await application_context.followup.send(NO_PDF_GIVEN, ephemeral=True)
            return
        if len(files) < 2:
            await application_context.followup.send(NOT_ENOUGH_FILES, ephemeral=True)
            return

        try:
            documents = [await file.read() for file in files]
            merged = await asyncio.to_thread(merge_pdfs, documents)
        except Exception:
            logger.exception("[MERGE PDF] Failed to merge %d files", len(files))
            await application_context.followup.send(MERGE_ERROR, ephemeral=True)
            return

        filename = f"{sanitize_pdf_name(name)}.pdf"
        logger.info("[MERGE PDF] Merged %d files into %s for user %s", len(files), filename, application_context.user.id)
        await application_context.followup.send(file=discord.File(io.BytesIO(merged), filename=filename))


def setup(discord_bot_instance):
    """Register the GeneralCog with the bot."""
    discord_bot_instance.add_cog(GeneralCog(discord_bot_instance))
