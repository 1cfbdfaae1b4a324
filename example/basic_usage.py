"""
服务器网络基本使用示例
"""
import sys
import os

import pandas as pd

# 添加src到路径
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from server_tree import Network
from server_tree.data.serializer import default_json_serializer
from server_tree.services.import_export import TableImporter, TableExporter


def main():
    """主函数"""
    print("=" * 60)
    print("服务器网络 - 基本使用示例")
    print("=" * 60)

    # 1. 创建网络
    print("\n1. 初始化网络...")
    net = Network(config={"log_level": "INFO"})

    # 2. 逐个挂载对端
    print("\n2. 构建拓扑...")
    net.attach_to_self("hubA")
    net.attach_to_name("hubA", "lhubA")
    net.attach_to_name("hubA", "leafA")
    net.attach_to_name("lhubA", "lleafA")
    net.attach_to_name("lhubA", "lleafB")
    net.attach_to_self("hubB")
    net.attach_to_name("hubB", "leafAA")
    net.print_map()

    # 3. 路由查询
    print("\n3. 路由查询:")
    for name in ("lleafB", "leafAA", "lleafB"):
        print(f"   {name}: {' -> '.join(net.trace(name))} ({net.hop_count(name)} 跳)")

    # 4. 拆分并重新挂载
    print("\n4. 拆分 lhubA 并以 newhub 挂到 hubB 之下...")
    lhub = net.tree.locate_subtree("lhubA")
    split = net.detach("lhubA")
    print(f"   随 lhubA 离开的节点: {split}")
    net.attach_to_name("hubB", "newhub", lhub)
    net.print_map()
    print(f"   lleafB: {' -> '.join(net.trace('lleafB'))}")

    # 5. 导出
    print("\n5. 导出:")
    print(default_json_serializer.serialize(net).decode("utf-8"))
    frame = TableExporter().to_frame(net)
    print(frame.to_string(index=False))

    # 6. 从表格导入
    print("\n6. 从缩进表格导入:")
    table = pd.DataFrame({"节点名称": ["irc.hub.org", "  irc.leaf1.org", "  irc.leaf2.org"]})
    imported = TableImporter().import_network(table)
    imported.print_map()

    print("\n统计信息:", net.get_stats())


if __name__ == "__main__":
    main()
