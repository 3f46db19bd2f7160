"""
Source data model.

A 'Source' is one titled unit of reference content the answering service may
cite. 'content.data' holds raw text for text mime types and base64 for anything
else. Field aliases keep the camelCase names used in the Gist document
('fileName', 'mimeType') so files written by other clients stay readable.

Collections are plain ordered sequences; insertion order is the display order
and is part of equality ('sources_equal').
"""

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field


class SourceContent(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    mime_type: str = Field(alias="mimeType")
    data: str


class Source(BaseModel):
    """A single reference document. Immutable; edits replace the whole entry."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    title: str
    file_name: str | None = Field(default=None, alias="fileName")
    content: SourceContent

    @property
    def is_text(self) -> bool:
        return self.content.mime_type.startswith("text/")

    def to_document(self) -> dict[str, object]:
        """Serialise with the document field names, omitting an absent file name."""
        return self.model_dump(by_alias=True, exclude_none=True)


def sources_equal(left: Sequence[Source], right: Sequence[Source]) -> bool:
    """Deep, order-sensitive structural equality of two collections."""
    if len(left) != len(right):
        return False
    return all(a == b for a, b in zip(left, right))


DEFAULT_SOURCES: tuple[Source, ...] = (
    Source(
        id="default-1",
        title="About Sao Viet IT Center",
        file_name="about.txt",
        content=SourceContent(
            mime_type="text/plain",
            data=(
                "Sao Viet IT Center is one of the leading providers of office software and applied "
                "information technology training in Vietnam. We offer a wide range of courses from "
                "beginner to advanced, including Microsoft Word, Excel, PowerPoint and in-depth data "
                "analysis courses. Our mission is to equip learners with the skills they need to "
                "succeed in the modern workplace."
            ),
        ),
    ),
    Source(
        id="default-2",
        title="Quality commitment",
        file_name="commitment.txt",
        content=SourceContent(
            mime_type="text/plain",
            data=(
                "At Sao Viet IT Center, teaching quality is our top priority. Our instructors are "
                "experts with many years of practical experience and excellent teaching skills. We "
                "guarantee that 100% of learners who complete a course will master the material and "
                "apply it confidently at work. The learning environment is modern and friendly, and "
                "learners are supported 24/7."
            ),
        ),
    ),
)
