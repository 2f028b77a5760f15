from lambda_logs.main import main

main()
