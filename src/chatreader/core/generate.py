"""
Renders analyzed conversations as Markdown notes.
"""
import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

import frontmatter
from jinja2 import Environment, FileSystemLoader, Template, select_autoescape

from .conversation import Conversation
from .message import Message, Role
from .metadata import Metadata, is_long_enough
from ..data.config import format_date, slugify

DEFAULT_TEMPLATE = 'conversation.md.jinja'

ROLE_LABELS = {
    Role.USER: '**User**',
    Role.SYSTEM: '**System**',
}
DEFAULT_ROLE_LABEL = '**Assistant**'


@lru_cache(maxsize=None)
def load_template(template_name: str = DEFAULT_TEMPLATE) -> Template:
    """Load a Jinja template from the templates directory; loaded once per name."""
    templates_dir = Path(__file__).parent.parent / 'templates'
    env = Environment(
        loader=FileSystemLoader(templates_dir),
        autoescape=select_autoescape(['html', 'xml']),
        trim_blocks=True,
    )
    return env.get_template(template_name)


def clean_content(text: str) -> str:
    """Normalize line endings, collapse blank-line runs and trim."""
    text = text.replace('\r\n', '\n')
    text = re.sub(r'\n{3,}', '\n\n', text)
    return text.strip()


def role_label(message: Message) -> str:
    return ROLE_LABELS.get(message.role, DEFAULT_ROLE_LABEL)


def prepare_messages(messages: List[Message]) -> List[Dict[str, str]]:
    # blank messages are left out of the note entirely
    return [
        {'label': role_label(msg), 'content': clean_content(msg.content)}
        for msg in messages
        if not msg.is_blank
    ]


def front_matter(conversation: Conversation, metadata: Metadata) -> Dict[str, Any]:
    tags = []
    for tag in list(metadata.context.technologies) + list(metadata.context.categories):
        if tag not in tags:
            tags.append(tag)
    for term in metadata.terms:
        if term.stem not in tags:
            tags.append(term.stem)

    matter: Dict[str, Any] = {'title': conversation.title}
    if conversation.date is not None:
        matter['date'] = format_date(conversation.date)
    matter['tags'] = tags
    return matter


def render_markdown(conversation: Conversation,
                    metadata: Metadata,
                    min_text_length: int = 0,
                    template_name: str = DEFAULT_TEMPLATE) -> Optional[str]:
    """Render a conversation note, or None if it is too short to keep."""
    if not is_long_enough(metadata, min_text_length):
        return None

    template = load_template(template_name)
    body = template.render(
        title=conversation.title,
        metadata=metadata,
        categories=list(metadata.context.categories),
        messages=prepare_messages(conversation.messages),
    )
    post = frontmatter.Post(body, **front_matter(conversation, metadata))
    return frontmatter.dumps(post) + '\n'


def note_filename(title: str, taken: Optional[Set[str]] = None) -> str:
    """Filename for a note; repeats within one run get a numeric suffix."""
    stem = slugify(title) or 'untitled'
    filename = f"{stem}.md"
    if taken is None:
        return filename

    counter = 2
    while filename in taken:
        filename = f"{stem}-{counter}.md"
        counter += 1
    taken.add(filename)
    return filename
