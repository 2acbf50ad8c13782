"""Run the system-manifests command line tool with `python -m system_manifests`."""

from system_manifests.tool.system_manifests import main

if __name__ == "__main__":
    main()
