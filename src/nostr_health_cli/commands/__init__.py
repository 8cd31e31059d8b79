"""Commands for the nostr-health CLI."""
