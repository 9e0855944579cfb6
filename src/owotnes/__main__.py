from owotnes.main_asyncio import run

if __name__ == "__main__":
    run()
