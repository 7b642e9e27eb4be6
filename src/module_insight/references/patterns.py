"""Regular expressions for references inside test artifacts."""

import re

# {{entity.field}} or {{section.element(args)}}; group 2 holds the parameterized form
BRACKET_REFERENCE = re.compile(r"(\{\{\w+\.[\w\[\]]+\}\})|(\{\{\w+\.\w+\((?:(?!\}\}).)+\)\}\})")

# Root entity name of a bracketed reference
BRACKET_ROOT = re.compile(r"\{\{([^.]+)")

# Argument list of a parameterized reference, parentheses included
PARAMETER_LIST = re.compile(r"\(.+\)")

ACTION_GROUP_REFERENCE = re.compile(r"ref=[\"']([^'\"]*)")

EXTENDS_REFERENCE = re.compile(r"extends=[\"']([^'\"]*)")

# <argument name="product" .../> declared by an action group
ACTION_GROUP_ARGUMENT = re.compile(r"<argument[^/>]*name=\"([^\"']*)")

STRING_PARAMETER = re.compile(r"'[^']+'")

# $createdProduct.sku$ and $$createdProduct.sku$$
PERSISTED_OBJECT = re.compile(r"\${1,2}[\w.\[\]]+\${1,2}")

ENTITY_ROOT = re.compile(r"([^.]+)")
