"""Git repository support.

- url_normalize.py: SSH shorthand to HTTPS rewriting for raw-file access
- metadata.py: metadata.json / .fixtures.yml retrieval and normalization
- git.py: the git module source
"""
