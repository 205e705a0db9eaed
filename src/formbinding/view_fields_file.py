"""
File upload view fields.

Uploaded files are validated before they reach a presentable field, so
validate() takes an UploadedFile instead of a presentable field.
"""

import logging
from decimal import Decimal, ROUND_HALF_EVEN
from typing import Any, Iterable, List, Optional

from formconf import get_current_settings, get_message
from formbinding import key_chain as kc
from formbinding.enums import FieldRenderMode, Mandatoriness, ValidityCheck, ValueSeparator
from formbinding.option_data import UploadedFile
from formbinding.presentable_field import PresentableFieldForElement, PresentableFieldForObject
from formbinding.view_field import ViewFieldForCollection, ViewFieldForElement

logger = logging.getLogger(__name__)

FORBIDDEN_FILE_NAME_CHARACTERS = ('<', '>', '*', '%', '&', ':', '\\')
MEBIBYTE = 1048576
IMAGE_MAX_FILE_SIZE = 50 * MEBIBYTE
IMAGE_MIME_TYPES = ('image/*',)


def _size_in_mebibytes(size: int) -> Decimal:
    return (Decimal(size) / MEBIBYTE).quantize(Decimal(1), rounding=ROUND_HALF_EVEN)


def is_matching_accepted_types(uploaded_file: UploadedFile, accepted_mime_types: Iterable[str]) -> bool:
    """Match a file against MIME types, 'type/*' prefixes and '.ext' suffixes, ignoring case."""
    content_type = (uploaded_file.content_type or '').upper()
    file_name = (uploaded_file.file_name or '').upper()
    for accepted in accepted_mime_types:
        accepted = accepted.upper()
        if accepted == content_type:
            return True
        if accepted.endswith('*') and len(accepted) > 1 and content_type.startswith(accepted[:-1]):
            return True
        if accepted.startswith('.') and file_name.endswith(accepted):
            return True
    return False


def clean_file_name(file_name: str) -> str:
    """Strip client-side directories some browsers send along with the name."""
    return file_name.rsplit('/', 1)[-1]


class ViewFieldForFile(ViewFieldForElement):
    """Single file upload.

    Args:
        accepted_mime_types: Accepted MIME types, 'type/*' wildcards or '.ext'
            extensions; empty accepts any type
        max_file_size: Maximum size in bytes, defaults to the configured limit
    """

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, *,
                 accepted_mime_types: Optional[Iterable[str]] = None,
                 max_file_size: Optional[int] = None, **kwargs: Any):
        super().__init__(title, key, mandatoriness, **kwargs)
        self.accepted_mime_types: List[str] = list(accepted_mime_types or [])
        if max_file_size is None:
            max_file_size = get_current_settings().max_file_size
        self.max_file_size = max_file_size

    def create_presentable_field(self, parent: Any) -> PresentableFieldForElement:
        return PresentableFieldForObject(parent, self.key)

    def get_default_error_message(self) -> str:
        size = _size_in_mebibytes(self.max_file_size)
        if self.accepted_mime_types:
            message = get_message('select_allowed_file_max_size', size)
        else:
            message = get_message('select_file_max_size', size)
        return self._with_info(message)

    def validate(self, uploaded_file: Optional[UploadedFile], validity_check: ValidityCheck,
                 topmost: Any = None, option_data: Any = None) -> Optional[str]:
        """Validate an uploaded file.

        A presentable field may be passed instead when a whole form is
        validated; its value is checked if it holds an UploadedFile and
        otherwise only counts as present or missing.

        Returns:
            None if the file is acceptable, else the error message
        """
        if isinstance(uploaded_file, PresentableFieldForElement):
            value = uploaded_file.value_as_object
            if value is not None and not isinstance(value, UploadedFile):
                return None
            uploaded_file = value
        if uploaded_file is None or uploaded_file.content_length < 1:
            if self.is_mandatory_for(validity_check):
                return self.get_default_error_message()
            return None
        if self.accepted_mime_types and not is_matching_accepted_types(uploaded_file, self.accepted_mime_types):
            logger.debug(f"File '{uploaded_file.file_name}' of type '{uploaded_file.content_type}' is not accepted")
            return self.get_default_error_message()
        if uploaded_file.content_length > self.max_file_size:
            return self.get_default_error_message()
        file_name = clean_file_name(uploaded_file.file_name or '')
        if any(character in file_name for character in FORBIDDEN_FILE_NAME_CHARACTERS):
            characters = ' '.join(FORBIDDEN_FILE_NAME_CHARACTERS)
            return self._with_info(get_message('file_name_forbidden_characters', characters))
        return None


class ViewFieldForMultipleFiles(ViewFieldForCollection):
    """Upload of several files sharing accepted types and maximum size."""

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, *,
                 accepted_mime_types: Optional[Iterable[str]] = None,
                 max_file_size: Optional[int] = None, **kwargs: Any):
        super().__init__(title, key, mandatoriness, **kwargs)
        self.accepted_mime_types: List[str] = list(accepted_mime_types or [])
        if max_file_size is None:
            max_file_size = get_current_settings().max_file_size
        self.max_file_size = max_file_size

    def get_default_error_message(self) -> str:
        size = _size_in_mebibytes(self.max_file_size)
        if self.limit is not None and self.limit < 2:
            name = 'select_allowed_file_max_size' if self.accepted_mime_types else 'select_file_max_size'
            message = get_message(name, size)
        else:
            name = 'select_allowed_files_max_size' if self.accepted_mime_types else 'select_files_max_size'
            message = get_message(name, size)
            if self.limit is not None:
                message = f"{message} {get_message('up_to_files_allowed', self.limit)}"
        return self._with_info(message)

    def get_value_separator(self, render_mode: FieldRenderMode) -> ValueSeparator:
        if render_mode is FieldRenderMode.FORM:
            return ValueSeparator.LINE_BREAK
        return ValueSeparator.COMMA

    def create_element_view_field(self) -> ViewFieldForFile:
        return self._create_file_view_field()

    def _create_file_view_field(self) -> ViewFieldForFile:
        element = ViewFieldForFile(self.title, self.key, Mandatoriness.OPTIONAL,
                                   accepted_mime_types=self.accepted_mime_types,
                                   max_file_size=self.max_file_size)
        return self._copy_description_to(element)

    def validate_file(self, uploaded_file: Optional[UploadedFile], validity_check: ValidityCheck) -> Optional[str]:
        """Validate one uploaded file against the shared type and size rules."""
        return self._create_file_view_field().validate(uploaded_file, validity_check)


class ViewFieldForImageFile(ViewFieldForFile):
    """Single image upload with minimum dimensions.

    Dimensions are only checked for uploads reporting width and height.

    Args:
        min_side_length: Minimum length in pixels of the longer side
        min_width: Minimum width in pixels
        min_height: Minimum height in pixels
        has_automatic_rotation_enabled: Whether renderers rotate images
            according to their orientation metadata
    """

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, *,
                 min_side_length: int = 0, min_width: int = 0, min_height: int = 0,
                 has_automatic_rotation_enabled: bool = True,
                 accepted_mime_types: Optional[Iterable[str]] = None,
                 max_file_size: Optional[int] = None, **kwargs: Any):
        if accepted_mime_types is None:
            accepted_mime_types = IMAGE_MIME_TYPES
        if max_file_size is None:
            max_file_size = IMAGE_MAX_FILE_SIZE
        super().__init__(title, key, mandatoriness, accepted_mime_types=accepted_mime_types,
                         max_file_size=max_file_size, **kwargs)
        self.min_side_length = min_side_length
        self.min_width = min_width
        self.min_height = min_height
        self.has_automatic_rotation_enabled = has_automatic_rotation_enabled

    def validate(self, uploaded_file: Optional[UploadedFile], validity_check: ValidityCheck,
                 topmost: Any = None, option_data: Any = None) -> Optional[str]:
        error_message = super().validate(uploaded_file, validity_check, topmost, option_data)
        if error_message:
            return error_message
        if isinstance(uploaded_file, PresentableFieldForElement):
            uploaded_file = uploaded_file.value_as_object
        if not isinstance(uploaded_file, UploadedFile) or not uploaded_file.has_dimensions:
            return None
        width, height = uploaded_file.width, uploaded_file.height
        if width < self.min_side_length and height < self.min_side_length:
            return self._with_info(get_message('image_min_side_length', self.min_side_length))
        if width < self.min_width or height < self.min_height:
            return self._with_info(get_message('image_min_resolution', self.min_width, self.min_height))
        return None


class ViewFieldForMultipleImageFiles(ViewFieldForMultipleFiles):
    """Upload of several images sharing type, size and dimension rules."""

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, *,
                 min_side_length: int = 0, min_width: int = 0, min_height: int = 0,
                 has_automatic_rotation_enabled: bool = True,
                 accepted_mime_types: Optional[Iterable[str]] = None,
                 max_file_size: Optional[int] = None, **kwargs: Any):
        if accepted_mime_types is None:
            accepted_mime_types = IMAGE_MIME_TYPES
        if max_file_size is None:
            max_file_size = IMAGE_MAX_FILE_SIZE
        super().__init__(title, key, mandatoriness, accepted_mime_types=accepted_mime_types,
                         max_file_size=max_file_size, **kwargs)
        self.min_side_length = min_side_length
        self.min_width = min_width
        self.min_height = min_height
        self.has_automatic_rotation_enabled = has_automatic_rotation_enabled

    def _create_file_view_field(self) -> ViewFieldForImageFile:
        element = ViewFieldForImageFile(self.title, self.key, Mandatoriness.OPTIONAL,
                                        min_side_length=self.min_side_length,
                                        min_width=self.min_width,
                                        min_height=self.min_height,
                                        has_automatic_rotation_enabled=self.has_automatic_rotation_enabled,
                                        accepted_mime_types=self.accepted_mime_types,
                                        max_file_size=self.max_file_size)
        return self._copy_description_to(element)
