"""Allow running the updater with ``python -m git_win_updater``"""

from git_win_updater.cli import main

if __name__ == "__main__":
    main(prog_name="git-update-git-for-windows")
