import nonebot

nonebot.init()

nonebot.load_plugin("rvstats.plugin")

if __name__ == "__main__":
    nonebot.run()
