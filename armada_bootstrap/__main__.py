from armada_bootstrap.cli import main

main()
