from portalserve.cli import main

main()
