from setup_utpm.main import main

if __name__ == "__main__":
    main()
