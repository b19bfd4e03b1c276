"""Entry point for ``python -m agent_manifests``."""

from agent_manifests.tool.agent_manifests import main

if __name__ == "__main__":
    main()
