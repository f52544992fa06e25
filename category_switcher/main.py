"""Main entry point for the category switcher."""

import sys
from .cache import initialize_classification_cache
from .classifier import Classifier
from .config import Config
from .controller import BackgroundRefresher, SwitcherController
from .hotkey import HotkeyListener
from .monitoring import list_running_applications
from .overlay import ConsoleOverlay
from .remote import RemoteClassifier
from .window_control import activate_app


def print_help(config: Config):
    """Print welcome message and help text."""
    print("=" * 60)
    print("Category Switcher")
    print("=" * 60)
    print(f"\n⌨️  Hold {config.modifier} to open the switcher:")
    print("  - Tab: next app (rolls into the next category)")
    print("  - Shift+Tab: previous app")
    print("  - Ctrl+Space: jump to the next category")
    print(f"  - Release {config.modifier} to switch to the selected app")
    if config.remote_configured:
        print(f"\nClassifying new apps with: {config.llm_model}"
              f" ({config.llm_endpoint or 'OpenAI'})")
    else:
        print("\nNo LLM API key configured; classifying apps by bundle id rules")
    print(f"Category cache: {config.settings_path}")
    print("=" * 60)


def build_controller(config: Config) -> SwitcherController:
    """
    Wire up the classifier, overlay and OS adapters.

    Args:
        config: Loaded configuration

    Returns:
        Ready-to-use controller (no snapshot loaded yet)
    """
    cache = initialize_classification_cache(
        settings_path=config.settings_path,
        cache_key=config.cache_key
    )
    remote = RemoteClassifier(config) if config.remote_configured else None
    classifier = Classifier(cache, remote=remote, max_workers=config.classify_workers)
    return SwitcherController(
        classifier=classifier,
        overlay=ConsoleOverlay(quiet=config.quiet),
        snapshot_source=list_running_applications,
        activator=activate_app
    )


def main():
    """Run the switcher until interrupted."""
    try:
        config = Config()
    except ValueError as e:
        print(f"Configuration error: {e}")
        sys.exit(1)

    print_help(config)

    controller = build_controller(config)
    controller.refresh()

    refresher = None
    if config.refresh_interval > 0:
        # Long enough for one listing plus one round of classification calls
        refresher = BackgroundRefresher(
            controller,
            interval=config.refresh_interval,
            join_timeout=config.llm_timeout + 5.0
        )
        refresher.start()

    listener = HotkeyListener(config.modifier)
    try:
        listener.start()
    except RuntimeError as e:
        print(f"Error: {e}")
        sys.exit(1)

    # Single control loop: events are applied one at a time in arrival order
    try:
        while True:
            event = listener.next_event(timeout=0.5)
            if event is not None:
                controller.dispatch(event)
    except KeyboardInterrupt:
        print("\nExiting...")
    finally:
        listener.stop()
        if refresher is not None:
            refresher.stop()


if __name__ == "__main__":
    main()
