"""Render one captured message as a markdown note entry."""

ATTACHMENTS_LINK_DIR = "../attachments"


def format_forward_info(provenance):
    if provenance is None:
        return ""
    return f" - Forwarded from {provenance.name}"


def format_attachment(att):
    target = f"{ATTACHMENTS_LINK_DIR}/{att.stored_name}"
    if att.kind.inline:
        return f"![{att.display_name}]({target})"
    return f"- [{att.display_name}]({target}) _({att.kind.label})_"


def format_record(message, attachments, timestamp):
    """Build the markdown fragment for a message.

    Layout: separator, bold timestamp with forward annotation, blank line,
    body, attachment list (only when something was fetched), separator.
    Attachments that failed to download are simply not in `attachments`.
    """
    parts = ["\n---\n", f"**{timestamp}**", format_forward_info(message.provenance), "\n\n"]

    body = message.body
    if body:
        parts.append(f"{body}\n")

    if attachments:
        parts.append("\n**Attachments:**\n")
        for att in attachments:
            parts.append(f"{format_attachment(att)}\n")

    parts.append("\n---\n")
    return "".join(parts)
