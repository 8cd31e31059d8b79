"""nostr-health command line tool."""
