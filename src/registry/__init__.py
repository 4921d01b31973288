"""Registry clients. forge.py resolves modules published on a Puppet Forge."""
