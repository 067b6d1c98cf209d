from github_release.cli import main

main()
