"""Puppetfile package.

- dsl.py: reads Puppetfile text into ordered directives
- title.py: module title validation and owner/name split
- classifier.py: ordered module sources and first-match selection
- loader.py: drives classification and resolution over a whole Puppetfile
- models.py / errors.py: shared data types and exceptions
"""
