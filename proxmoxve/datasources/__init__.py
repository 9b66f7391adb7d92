"""Read-only data sources for cluster aliases, datastores, DNS, groups, hosts, nodes, time, pools, roles, users and version."""