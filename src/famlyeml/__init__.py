"""
famlyeml - Famly enrollment form EML parser

Turns the email export of a child-care enrollment form (a quoted-printable
HTML table of questions and answers) into a structured enrollment record.
"""

__version__ = "0.1.0"
__author__ = "famlyeml Contributors"
