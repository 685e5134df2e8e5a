"""CSV field definitions -> Salesforce CustomField metadata (field-meta.xml) ZIP generator."""

__version__ = "0.1.0"
