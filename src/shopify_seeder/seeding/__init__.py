"""Product seeding pipeline: drafts, batch submission, image attachment."""
from .batch_loop import BatchSubmissionLoop, round_sizes
from .fake_data import MARKER_TAG, ProductDraftFactory
from .images import ImageAttacher
from .publication import PublicationResolver

__all__ = [
    "BatchSubmissionLoop",
    "ImageAttacher",
    "MARKER_TAG",
    "ProductDraftFactory",
    "PublicationResolver",
    "round_sizes",
]
