from nginx_deploy.cli import main

main()
