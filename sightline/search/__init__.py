"""Full-text index, query building and URL lens filtering."""