"""Setup steps: packages, identity, SSH keys, authentication and cloning."""
