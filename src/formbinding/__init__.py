"""
Form data binding and validation.

This package binds declarative form definitions to nested object graphs,
renders their values read-only and validates user input.

Key Features:
- Key chains addressing fields in nested presentable objects
- Typed presentable fields with invariant string round-tripping
- Calculated fields with explicit caching
- Option and lookup providers for choices and searches
- View fields for text, numbers, dates, choices, lookups, files and colors
- Pane composition with flattening, read-only and validity aggregation

Quick Start:
    >>> from formbinding import (
    ...     FormView, PresentableObject, PresentableFieldForString,
    ...     ViewPaneForFields, ViewFieldForSingleLineText,
    ...     Mandatoriness, ValidityCheck,
    ... )
    >>> person = PresentableObject()
    >>> person.add_presentable_field(PresentableFieldForString(person, 'name'))
    >>> form = FormView([ViewPaneForFields('Person', None, [
    ...     ViewFieldForSingleLineText('Name', 'name', Mandatoriness.REQUIRED),
    ... ])])
    >>> form.is_valid_value(person, ValidityCheck.LOOSE)
    False

Modules:
    - key_chain: Key chain helpers
    - presentable_field / calculated_field / presentable_object: The data side
    - option_provider / lookup_provider / option_data: Value sources
    - view_field and view_fields_*: Field descriptors
    - view_pane / view_collection_pane / form_view: Composition
"""

# Errors
from formbinding.errors import (
    PresentationError,
    KeyChainError,
    FieldNotFoundError,
    CalculatedFieldError,
)

# Enumerations
from formbinding.enums import (
    Mandatoriness,
    ValidityCheck,
    DateTimeType,
    ValueSeparator,
    FieldRenderMode,
    SectionGroupType,
    OptionControlType,
    OptionDisplayStyle,
)

# Data side
from formbinding.presentable_field import (
    PresentableField,
    PresentableFieldForElement,
    PresentableFieldForString,
    PresentableFieldForInt,
    PresentableFieldForDecimal,
    PresentableFieldForBool,
    PresentableFieldForDateTime,
    PresentableFieldForObject,
    PresentableFieldForPresentableObject,
    PresentableFieldForNumberWithUnit,
    PresentableFieldForUser,
    PresentableFieldForCollection,
    PresentableFieldForStringCollection,
    PresentableFieldForIntCollection,
    PresentableFieldForDecimalCollection,
    PresentableFieldForDateTimeCollection,
    PresentableFieldForObjectCollection,
    PresentableFieldForPresentableObjectCollection,
    PresentableFieldForUserCollection,
)
from formbinding.calculated_field import (
    PresentableFieldForCalculatedValue,
    PresentableFieldForCalculatedValueCollection,
    PresentableFieldForCalculatedUser,
    PresentableFieldForCalculatedUserCollection,
)
from formbinding.numbers import NumberWithUnit
from formbinding.presentable_object import (
    PresentableFieldCollection,
    PresentableObject,
    DurablePresentableObject,
)

# Value sources
from formbinding.option_data import (
    User,
    UserValueComparer,
    UserDirectory,
    InMemoryUserDirectory,
    FilterCriteria,
    FilterCriterion,
    FilterScope,
    RelationalOperator,
    SortCriterion,
    OptionDataProvider,
    UploadedFile,
)
from formbinding.option_provider import (
    OptionProvider,
    StaticOptionProvider,
    GroupedOptionProvider,
    PersonOptionProvider,
    StaticPersonOptionProvider,
)
from formbinding.lookup_provider import (
    LookupProvider,
    TypedLookupProvider,
    StringLookupProvider,
    StaticStringLookupProvider,
    PresentableObjectLookupProvider,
    PersonLookupProvider,
)

# View fields
from formbinding.view_field import (
    ViewField,
    ViewFieldForEditableValue,
    ViewFieldForElement,
    ViewFieldForElementWithPlaceholder,
    ViewFieldForCollection,
    ViewFieldForCollectionWithPlaceholder,
)
from formbinding.view_fields_text import (
    ViewFieldForSingleLineTextBase,
    ViewFieldForSingleLineText,
    ViewFieldForPhoneNumber,
    ViewFieldForPassword,
    ViewFieldForMultilineText,
    ViewFieldForMultilineRichText,
    ViewFieldForMultipleSingleLineTexts,
    ViewFieldForMultiplePhoneNumbers,
)
from formbinding.view_fields_number import (
    ViewFieldForNumberWithoutUnit,
    ViewFieldForNumber,
    ViewFieldForNumberWithUnit,
    ViewFieldForNumberWithUnitChoice,
    ViewFieldForSubsequentNumber,
    ViewFieldForMultipleNumbers,
)
from formbinding.view_fields_date import (
    ViewFieldForDateTime,
    ViewFieldForSubsequentDateTime,
)
from formbinding.view_fields_choice import (
    ViewFieldForChoice,
    ViewFieldForStringChoice,
    ViewFieldForPresentableObjectChoice,
    ViewFieldForPersonChoice,
    ViewFieldForBoolChoice,
    ViewFieldForMultipleChoices,
    ViewFieldForMultipleStringChoices,
    ViewFieldForMultiplePresentableObjectChoices,
)
from formbinding.view_fields_lookup import (
    ViewFieldForLookup,
    ViewFieldForStringLookup,
    ViewFieldForPresentableObjectLookup,
    ViewFieldForMultipleLookups,
    ViewFieldForMultipleStringLookups,
    ViewFieldForMultiplePresentableObjectLookups,
)
from formbinding.view_fields_file import (
    ViewFieldForFile,
    ViewFieldForImageFile,
    ViewFieldForMultipleFiles,
    ViewFieldForMultipleImageFiles,
)
from formbinding.view_fields_color import (
    ViewFieldForColor,
    ViewFieldForMultipleColors,
)

# Composition
from formbinding.view_pane import (
    ViewPane,
    ViewPaneWithTitle,
    ViewPaneForFields,
    ViewPaneForPanes,
    ViewGroupedPane,
)
from formbinding.view_collection_pane import (
    ViewCollectionPane,
    ViewCollectionPaneForFields,
    ViewCollectionPaneForPanes,
)
from formbinding.form_view import FormView

__all__ = [
    # Errors
    'PresentationError',
    'KeyChainError',
    'FieldNotFoundError',
    'CalculatedFieldError',

    # Enumerations
    'Mandatoriness',
    'ValidityCheck',
    'DateTimeType',
    'ValueSeparator',
    'FieldRenderMode',
    'SectionGroupType',
    'OptionControlType',
    'OptionDisplayStyle',

    # Presentable fields and objects
    'PresentableField',
    'PresentableFieldForElement',
    'PresentableFieldForString',
    'PresentableFieldForInt',
    'PresentableFieldForDecimal',
    'PresentableFieldForBool',
    'PresentableFieldForDateTime',
    'PresentableFieldForObject',
    'PresentableFieldForPresentableObject',
    'PresentableFieldForNumberWithUnit',
    'PresentableFieldForUser',
    'PresentableFieldForCollection',
    'PresentableFieldForStringCollection',
    'PresentableFieldForIntCollection',
    'PresentableFieldForDecimalCollection',
    'PresentableFieldForDateTimeCollection',
    'PresentableFieldForObjectCollection',
    'PresentableFieldForPresentableObjectCollection',
    'PresentableFieldForUserCollection',
    'PresentableFieldForCalculatedValue',
    'PresentableFieldForCalculatedValueCollection',
    'PresentableFieldForCalculatedUser',
    'PresentableFieldForCalculatedUserCollection',
    'NumberWithUnit',
    'PresentableFieldCollection',
    'PresentableObject',
    'DurablePresentableObject',

    # Option data
    'User',
    'UserValueComparer',
    'UserDirectory',
    'InMemoryUserDirectory',
    'FilterCriteria',
    'FilterCriterion',
    'FilterScope',
    'RelationalOperator',
    'SortCriterion',
    'OptionDataProvider',
    'UploadedFile',

    # Option and lookup providers
    'OptionProvider',
    'StaticOptionProvider',
    'GroupedOptionProvider',
    'PersonOptionProvider',
    'StaticPersonOptionProvider',
    'LookupProvider',
    'TypedLookupProvider',
    'StringLookupProvider',
    'StaticStringLookupProvider',
    'PresentableObjectLookupProvider',
    'PersonLookupProvider',

    # View fields
    'ViewField',
    'ViewFieldForEditableValue',
    'ViewFieldForElement',
    'ViewFieldForElementWithPlaceholder',
    'ViewFieldForCollection',
    'ViewFieldForCollectionWithPlaceholder',
    'ViewFieldForSingleLineTextBase',
    'ViewFieldForSingleLineText',
    'ViewFieldForPhoneNumber',
    'ViewFieldForPassword',
    'ViewFieldForMultilineText',
    'ViewFieldForMultilineRichText',
    'ViewFieldForMultipleSingleLineTexts',
    'ViewFieldForMultiplePhoneNumbers',
    'ViewFieldForNumberWithoutUnit',
    'ViewFieldForNumber',
    'ViewFieldForNumberWithUnit',
    'ViewFieldForNumberWithUnitChoice',
    'ViewFieldForSubsequentNumber',
    'ViewFieldForMultipleNumbers',
    'ViewFieldForDateTime',
    'ViewFieldForSubsequentDateTime',
    'ViewFieldForChoice',
    'ViewFieldForStringChoice',
    'ViewFieldForPresentableObjectChoice',
    'ViewFieldForPersonChoice',
    'ViewFieldForBoolChoice',
    'ViewFieldForMultipleChoices',
    'ViewFieldForMultipleStringChoices',
    'ViewFieldForMultiplePresentableObjectChoices',
    'ViewFieldForLookup',
    'ViewFieldForStringLookup',
    'ViewFieldForPresentableObjectLookup',
    'ViewFieldForMultipleLookups',
    'ViewFieldForMultipleStringLookups',
    'ViewFieldForMultiplePresentableObjectLookups',
    'ViewFieldForFile',
    'ViewFieldForImageFile',
    'ViewFieldForMultipleFiles',
    'ViewFieldForMultipleImageFiles',
    'ViewFieldForColor',
    'ViewFieldForMultipleColors',

    # Panes
    'ViewPane',
    'ViewPaneWithTitle',
    'ViewPaneForFields',
    'ViewPaneForPanes',
    'ViewGroupedPane',
    'ViewCollectionPane',
    'ViewCollectionPaneForFields',
    'ViewCollectionPaneForPanes',
    'FormView',
]
