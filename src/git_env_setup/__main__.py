from git_env_setup import main

main()
