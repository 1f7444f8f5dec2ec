from react_meta_data.cli import main

if __name__ == "__main__":
    main()
