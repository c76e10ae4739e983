"""
The single dashboard page.

The page polls /api/info and /api/blockchain and renders a fixed set of
fields. Rendering is best effort: any failed fetch swaps the content for a
generic connection error panel.
"""

import html


_PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>__TITLE__</title>
    <style>
        * { margin: 0; padding: 0; box-sizing: border-box; }
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            background: #0f0f23; color: #ffffff; min-height: 100vh; padding: 20px;
        }
        .container {
            max-width: 1200px; margin: 0 auto; background: #1a1a2e;
            border-radius: 16px; overflow: hidden; border: 1px solid #16213e;
        }
        .header {
            background: linear-gradient(135deg, #0066cc 0%, #002352 100%);
            padding: 30px; text-align: center;
        }
        .header h1 { font-size: 2.2em; margin-bottom: 8px; }
        .dashboard { padding: 40px; }
        .stats-grid {
            display: grid; grid-template-columns: repeat(auto-fit, minmax(220px, 1fr));
            gap: 20px; margin-bottom: 30px;
        }
        .stat-card, .info-section {
            background: #2d3748; border-radius: 12px; padding: 20px;
            border: 1px solid #4a5568; margin-bottom: 20px;
        }
        .stat-title, .info-label { color: #a29bfe; font-weight: 600; }
        .stat-title { font-size: 0.9em; text-transform: uppercase; margin-bottom: 8px; }
        .stat-value { font-size: 1.8em; font-weight: 700; }
        .info-section h3 { color: #4da3ff; margin-bottom: 15px; }
        .info-grid {
            display: grid; grid-template-columns: repeat(auto-fit, minmax(260px, 1fr)); gap: 15px;
        }
        .info-item {
            display: flex; justify-content: space-between; padding: 10px 0;
            border-bottom: 1px solid #4a5568;
        }
        .info-value { color: #cbd5e0; text-align: right; font-family: monospace; }
        .loading { text-align: center; color: #a29bfe; padding: 20px; }
        .error {
            background: #fc8181; color: #1a202c; padding: 15px;
            border-radius: 8px; margin: 20px 0; text-align: center;
        }
        .status-indicator {
            display: inline-block; width: 10px; height: 10px;
            border-radius: 50%; margin-right: 8px;
        }
        .status-online { background: #48bb78; }
        .status-offline { background: #f56565; }
        .refresh-btn {
            background: #0066cc; color: white; border: none; padding: 12px 24px;
            border-radius: 8px; font-weight: 600; cursor: pointer;
        }
    </style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>__TITLE__</h1>
            <p>Status of the local full node</p>
        </div>
        <div class="dashboard">
            <div id="loading" class="loading">
                <h3>Loading node information...</h3>
            </div>
            <div id="content" style="display: none;">
                <div class="stats-grid">
                    <div class="stat-card">
                        <div class="stat-title">Node Status</div>
                        <div class="stat-value">
                            <span id="node-status" class="status-indicator status-offline"></span>
                            <span id="status-text">Checking...</span>
                        </div>
                    </div>
                    <div class="stat-card">
                        <div class="stat-title">Block Height</div>
                        <div class="stat-value" id="block-height">0</div>
                    </div>
                    <div class="stat-card">
                        <div class="stat-title">Connections</div>
                        <div class="stat-value" id="connections">0</div>
                    </div>
                    <div class="stat-card">
                        <div class="stat-title">Difficulty</div>
                        <div class="stat-value" id="difficulty">0</div>
                    </div>
                </div>
                <div class="info-section">
                    <h3>Network</h3>
                    <div class="info-grid">
                        <div class="info-item"><span class="info-label">Network</span><span class="info-value" id="network">-</span></div>
                        <div class="info-item"><span class="info-label">Version</span><span class="info-value" id="version">-</span></div>
                        <div class="info-item"><span class="info-label">Protocol Version</span><span class="info-value" id="protocol-version">-</span></div>
                        <div class="info-item"><span class="info-label">Verification Progress</span><span class="info-value" id="verification-progress">-</span></div>
                    </div>
                </div>
                <div class="info-section">
                    <h3>Blockchain</h3>
                    <div class="info-grid">
                        <div class="info-item"><span class="info-label">Best Block Hash</span><span class="info-value" id="best-block-hash">-</span></div>
                        <div class="info-item"><span class="info-label">Chain Work</span><span class="info-value" id="chain-work">-</span></div>
                        <div class="info-item"><span class="info-label">Size on Disk</span><span class="info-value" id="size-on-disk">-</span></div>
                        <div class="info-item"><span class="info-label">Pruned</span><span class="info-value" id="pruned">-</span></div>
                    </div>
                </div>
                <button class="refresh-btn" id="refresh-btn">Refresh Data</button>
            </div>
            <div id="error" style="display: none;" class="error">
                <h3>Connection Error</h3>
                <p>Unable to connect to the node. Check that it is running and try again.</p>
            </div>
        </div>
    </div>
    <script>
        const REFRESH_INTERVAL_MS = __REFRESH_MS__;

        function setText(id, value) {
            document.getElementById(id).textContent = value;
        }

        function truncate(value, length) {
            return value ? value.substring(0, length) + '...' : 'Unknown';
        }

        function formatBytes(bytes, decimals = 2) {
            if (!bytes) return '0 Bytes';
            const k = 1024;
            const sizes = ['Bytes', 'KB', 'MB', 'GB', 'TB'];
            const i = Math.min(Math.floor(Math.log(bytes) / Math.log(k)), sizes.length - 1);
            return parseFloat((bytes / Math.pow(k, i)).toFixed(decimals)) + ' ' + sizes[i];
        }

        function show(panel) {
            for (const id of ['loading', 'content', 'error']) {
                document.getElementById(id).style.display = id === panel ? 'block' : 'none';
            }
        }

        function render(info, blockchain) {
            const online = info.blocks > 0;
            document.getElementById('node-status').className =
                'status-indicator ' + (online ? 'status-online' : 'status-offline');
            setText('status-text', online ? 'Online' : 'Offline');
            setText('block-height', (info.blocks || 0).toLocaleString());
            setText('connections', info.connections || 0);
            setText('difficulty', parseFloat(info.difficulty || 0).toFixed(2));
            setText('version', info.version || 'Unknown');
            setText('protocol-version', info.protocolversion || 'Unknown');
            setText('network', info.testnet ? 'testnet' : 'mainnet');
            setText('best-block-hash', truncate(blockchain.bestblockhash, 20));
            setText('chain-work', truncate(blockchain.chainwork, 20));
            setText('size-on-disk', formatBytes(blockchain.size_on_disk || 0));
            setText('pruned', blockchain.pruned ? 'Yes' : 'No');
            setText('verification-progress',
                ((blockchain.verificationprogress || 0) * 100).toFixed(1) + '%');
        }

        async function loadNodeData() {
            try {
                const [infoResponse, blockchainResponse] = await Promise.all([
                    fetch('/api/info'),
                    fetch('/api/blockchain')
                ]);
                if (!infoResponse.ok || !blockchainResponse.ok) {
                    throw new Error('API request failed');
                }
                render(await infoResponse.json(), await blockchainResponse.json());
                show('content');
            } catch (err) {
                console.error('Error loading node data:', err);
                show('error');
            }
        }

        document.getElementById('refresh-btn').addEventListener('click', loadNodeData);
        loadNodeData();
        const timer = setInterval(loadNodeData, REFRESH_INTERVAL_MS);
        window.addEventListener('pagehide', () => clearInterval(timer));
    </script>
</body>
</html>
"""


def render_index_page(title: str = "DigiByte Node Dashboard", refresh_interval: float = 30) -> str:
    """Render the dashboard HTML.

    Args:
        title: Page and header title, HTML-escaped
        refresh_interval: Polling period in seconds

    Returns:
        Complete HTML document
    """
    refresh_ms = max(int(float(refresh_interval) * 1000), 1000)
    return (_PAGE_TEMPLATE
            .replace("__TITLE__", html.escape(title))
            .replace("__REFRESH_MS__", str(refresh_ms)))
