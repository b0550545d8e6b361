from abc import ABC, abstractmethod

from ratecon.core.document import RenderedDocument, UploadedDocument


class DocumentRenderer(ABC):
    @abstractmethod
    def render(self, document: UploadedDocument) -> RenderedDocument:
        """Render a document into ordered page images.

        All-or-nothing: raises DocumentRenderError and returns no pages if any
        page fails.
        """
        ...
