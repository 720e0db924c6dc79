"""Constants for locating the form data inside a Famly email export."""


# id of the <table> holding the question/answer rows
DATA_TABLE_ID = "emailFieldsTable"

# Cell class markers (matched exactly, or as a substring of the class attribute)
QUESTION_CLASS_MARKER = "question"
VALUE_CLASS_MARKER = "value"

QUESTION_CELL_SELECTOR = f'td.{QUESTION_CLASS_MARKER}Column, td[class*="{QUESTION_CLASS_MARKER}"]'
VALUE_CELL_SELECTOR = f'td.{VALUE_CLASS_MARKER}Column, td[class*="{VALUE_CLASS_MARKER}"]'

EML_EXTENSION = ".eml"

# Record subsets available for JSON output
JSON_SECTIONS: dict[str, tuple[str, ...]] = {
    "all": (),
    "child": ("child",),
    "contacts": ("parents", "guardian", "emergency_contact"),
    "health": ("doctor", "immunisations", "special_needs"),
}
