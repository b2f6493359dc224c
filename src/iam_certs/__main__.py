from iam_certs.cli import main

main()
