"""
Template Matcher - Identifies which recurring document each upload is.

A document matches a template when the template's ID phrase (and second ID
phrase, when set) occurs in the full text of any of its pages. Templates
are tried in list order and the first match wins.
"""
import logging
from typing import List, Optional, Sequence, Tuple

from core.models import DocumentText, MatchResult, Template
from utils.text_utils import contains_phrase

logger = logging.getLogger(__name__)


def matches_template(doc_text: DocumentText, template: Template) -> bool:
    """
    Check whether a document contains a template's ID phrases.

    Each phrase may be found on any page, independently of the other.
    A document without annotated pages never matches.
    """
    if not contains_phrase(doc_text, template.id_phrase):
        return False
    return not template.id_phrase2 or contains_phrase(doc_text, template.id_phrase2)


def find_template(
    doc_text: DocumentText,
    templates: Sequence[Template]
) -> Optional[Template]:
    """Return the first template in list order matching the document."""
    for template in templates:
        if matches_template(doc_text, template):
            return template
    return None


def match_documents(
    docs_text: Sequence[DocumentText],
    templates: Sequence[Template]
) -> List[Tuple[DocumentText, Optional[Template]]]:
    """Pair each document, in batch order, with its template or None."""
    return [(doc_text, find_template(doc_text, templates)) for doc_text in docs_text]


def summarize_matches(
    matches: Sequence[Tuple[DocumentText, Optional[Template]]]
) -> MatchResult:
    """
    Split document/template pairs into matched and unmatched lists.

    Args:
        matches: Output of match_documents

    Returns:
        MatchResult listing matched names, (name, template) pairs and
        unmatched names, each in batch order
    """
    matched_file_names: List[str] = []
    matched_templates: List[Tuple[str, Template]] = []
    unmatched_file_names: List[str] = []

    for doc_text, template in matches:
        if template is None:
            logger.debug("No template matched %s", doc_text.file_name)
            unmatched_file_names.append(doc_text.file_name)
            continue

        logger.debug("Matched %s to template %r", doc_text.file_name, template.name)
        matched_file_names.append(doc_text.file_name)
        matched_templates.append((doc_text.file_name, template))

    logger.info(
        "Identified %d of %d documents",
        len(matched_file_names),
        len(matches)
    )

    return MatchResult(
        matched_file_names=tuple(matched_file_names),
        matched_templates=tuple(matched_templates),
        unmatched_file_names=tuple(unmatched_file_names)
    )


def identify_doc_text(
    docs_text: Sequence[DocumentText],
    templates: Sequence[Template]
) -> MatchResult:
    """
    Match every document of a batch against the user's templates.

    Args:
        docs_text: Extracted text of all documents in the batch
        templates: The user's templates, in precedence order

    Returns:
        MatchResult for the batch
    """
    return summarize_matches(match_documents(docs_text, templates))
