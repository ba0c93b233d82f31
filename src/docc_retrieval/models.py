"""DocC render-node schema."""

from pydantic import BaseModel, ConfigDict, Field


class SchemaVersion(BaseModel):
    """Render-node schema version triple."""

    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


class DocumentIdentifier(BaseModel):
    """Canonical identifier of a documentation page."""

    model_config = ConfigDict(populate_by_name=True)

    url: str
    interface_language: str = Field(alias="interfaceLanguage")


class InlineContent(BaseModel):
    """A single abstract fragment (text, code voice, reference...)."""

    model_config = ConfigDict(extra="allow")

    type: str
    text: str | None = None
    code: str | None = None
    identifier: str | None = None

    @property
    def plain_text(self) -> str:
        return self.text or self.code or ""


class Metadata(BaseModel):
    """Page metadata; only the title is interpreted."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    title: str | None = None
    role: str | None = None
    role_heading: str | None = Field(default=None, alias="roleHeading")


class DocCRenderNode(BaseModel):
    """Decoded DocC JSON documentation page.

    Unknown top-level keys (sections, references, hierarchy...) are kept so
    the node can be re-serialized without loss.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    schema_version: SchemaVersion = Field(alias="schemaVersion")
    identifier: DocumentIdentifier
    kind: str
    metadata: Metadata | None = None
    abstract: list[InlineContent] | None = None

    @property
    def title(self) -> str | None:
        return self.metadata.title if self.metadata else None

    @property
    def abstract_text(self) -> str:
        if not self.abstract:
            return ""
        return "".join(fragment.plain_text for fragment in self.abstract)

    def to_json_dict(self) -> dict:
        """Dump using the wire (camelCase) field names, dropping nulls."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
