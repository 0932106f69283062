"""Main entry point for the Synaptic Store command line."""

from synaptic_store.cli import main


if __name__ == "__main__":
    main()
